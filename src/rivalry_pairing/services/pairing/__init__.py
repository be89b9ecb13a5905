from .engine import (
    HistoricalMatchup,
    Matchup,
    PairingParameters,
    PairingResult,
    RankedCompetitor,
    compute_pairings,
    matchups_to_history,
    pair_key,
)

__all__ = [
    "HistoricalMatchup",
    "Matchup",
    "PairingParameters",
    "PairingResult",
    "RankedCompetitor",
    "compute_pairings",
    "matchups_to_history",
    "pair_key",
]
