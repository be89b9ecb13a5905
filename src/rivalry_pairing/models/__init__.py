from .period import RivalryMetric, RivalryPeriod
from .snapshot import ActivityRow, MatchupRecord, PairingSnapshot, PlayerRow

__all__ = [
    "ActivityRow",
    "MatchupRecord",
    "PairingSnapshot",
    "PlayerRow",
    "RivalryMetric",
    "RivalryPeriod",
]
