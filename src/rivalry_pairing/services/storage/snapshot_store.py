"""Snapshot loading and pairing artifact persistence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pydantic
import structlog
import yaml

from rivalry_pairing.core.config import RivalryConfig
from rivalry_pairing.core.errors import MissingFieldError, SnapshotError
from rivalry_pairing.models import PairingSnapshot
from rivalry_pairing.services.pairing import PairingResult

from .paths import StoragePaths
from .report_generator import ReportGenerator

logger = structlog.get_logger()

REQUIRED_FIELDS = ("period_number", "players")


class SnapshotStore:
    """Read pairing snapshots and write pairing artifacts.

    Snapshots are YAML (``.yaml``/``.yml``) or JSON files. Artifacts land in
    ``<output_dir>/period_<n>/``.
    """

    def __init__(self, config: RivalryConfig, output_dir: str | Path | None = None) -> None:
        self.config = config
        self.base_dir = Path(output_dir or config.output_dir)
        self._paths = StoragePaths(self.base_dir)
        self._reports = ReportGenerator(self._paths, config.slug_max_length)

    def load(self, path: str | Path) -> PairingSnapshot:
        """Load and validate a snapshot file.

        Raises:
            FileNotFoundError: If the snapshot file doesn't exist.
            MissingFieldError: If a required top-level field is absent.
            SnapshotError: If the file cannot be parsed or validated.
        """
        snapshot_path = Path(path)
        if not snapshot_path.exists():
            msg = f"Snapshot file not found: {snapshot_path}"
            raise FileNotFoundError(msg)

        data = self._read(snapshot_path)
        if not isinstance(data, dict):
            raise SnapshotError(str(snapshot_path), "top level must be a mapping")
        for field in REQUIRED_FIELDS:
            if field not in data:
                raise MissingFieldError(field, str(snapshot_path))

        try:
            snapshot = PairingSnapshot.model_validate(data)
        except pydantic.ValidationError as e:
            raise SnapshotError(str(snapshot_path), str(e)) from e

        logger.debug(
            "snapshot_loaded",
            path=str(snapshot_path),
            period=snapshot.period_number,
            players=len(snapshot.players),
            history=len(snapshot.history),
        )
        return snapshot

    @staticmethod
    def _read(path: Path) -> Any:
        text = path.read_text(encoding="utf-8")
        try:
            if path.suffix.lower() == ".json":
                return json.loads(text)
            return yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SnapshotError(str(path), f"could not parse file ({e})") from e

    def save_result(self, snapshot: PairingSnapshot, result: PairingResult) -> Path:
        """Write JSON and markdown artifacts for a pairing result.

        Returns:
            Directory holding the artifacts.
        """
        period_number = snapshot.period_number
        scores = {p.id: p.total_points for p in snapshot.players}

        json_path = self._reports.save_json(
            period_number,
            result,
            extra={"pairing": self.config.pairing.model_dump()},
        )
        self._reports.save_markdown(period_number, result, scores)
        logger.info("pairings_saved", period=period_number, path=str(json_path.parent))
        return json_path.parent
