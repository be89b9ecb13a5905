from .paths import StoragePaths
from .report_generator import ReportGenerator, build_pairing_table, result_to_dict
from .snapshot_store import SnapshotStore

__all__ = [
    "ReportGenerator",
    "SnapshotStore",
    "StoragePaths",
    "build_pairing_table",
    "result_to_dict",
]
