"""Rivalry Pairing.

Bi-weekly 1v1 rivalry matchups for ranked fitness competitors, pairing
rank neighbours while steering clear of recent rematches.
"""

from rivalry_pairing.services.pairing import (
    HistoricalMatchup,
    Matchup,
    PairingParameters,
    PairingResult,
    RankedCompetitor,
    compute_pairings,
)

__version__ = "0.1.0"
__all__ = [
    "HistoricalMatchup",
    "Matchup",
    "PairingParameters",
    "PairingResult",
    "RankedCompetitor",
    "__version__",
    "compute_pairings",
]
