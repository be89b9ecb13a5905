"""Rank-adjacent, history-aware rivalry pairing."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

K0 = 4
DELTA = 3
KMAX = 10
RECENT_AVOIDANCE_PERIODS = 2

NEVER_FACED = 0
FACED_LONG_AGO = 1
FACED_RECENTLY = 2


@dataclass(frozen=True)
class RankedCompetitor:
    """A competitor eligible for pairing.

    Attributes:
        id: Unique identifier.
        rank_score: Score the caller ranked by (descending).
    """

    id: str
    rank_score: float = 0.0


@dataclass(frozen=True)
class HistoricalMatchup:
    """An unordered pair that faced each other in a past period."""

    competitor_a: str
    competitor_b: str
    period_number: int


@dataclass(frozen=True)
class Matchup:
    """A generated 1v1 pairing."""

    competitor_a: str
    competitor_b: str


@dataclass(frozen=True)
class PairingResult:
    """Pairings for one period plus the competitor sitting out, if any."""

    matchups: list[Matchup] = field(default_factory=list)
    bye: str | None = None

    def competitor_ids(self) -> list[str]:
        """All competitors covered by this result, bye last."""
        ids = [cid for m in self.matchups for cid in (m.competitor_a, m.competitor_b)]
        if self.bye is not None:
            ids.append(self.bye)
        return ids


@dataclass(frozen=True)
class PairingParameters:
    """Window and recency tuning for :func:`compute_pairings`.

    Attributes:
        initial_window: Ranks below the anchor searched first.
        window_step: Growth applied each time a window comes up empty.
        max_window: Hard cap on the window before falling back to the full pool.
        recent_avoidance_periods: Periods that must elapse before a rematch is
            no longer considered recent.
    """

    initial_window: int = K0
    window_step: int = DELTA
    max_window: int = KMAX
    recent_avoidance_periods: int = RECENT_AVOIDANCE_PERIODS


PairKey = tuple[str, str]


def pair_key(a: str, b: str) -> PairKey:
    """Order-independent key for a pair of competitor IDs."""
    return (a, b) if a < b else (b, a)


def build_history_index(history: Sequence[HistoricalMatchup]) -> dict[PairKey, list[int]]:
    """Map each pair key to the periods in which that pair met."""
    index: dict[PairKey, list[int]] = {}
    for record in history:
        key = pair_key(record.competitor_a, record.competitor_b)
        index.setdefault(key, []).append(record.period_number)
    return index


def periods_since_last_faced(
    history_index: dict[PairKey, list[int]],
    a: str,
    b: str,
    current_period_number: int,
) -> float:
    """Periods elapsed since ``a`` and ``b`` last met, ``math.inf`` if never."""
    periods = history_index.get(pair_key(a, b))
    if not periods:
        return math.inf
    return current_period_number - max(periods)


def preference_level(
    history_index: dict[PairKey, list[int]],
    a: str,
    b: str,
    current_period_number: int,
    recent_avoidance_periods: int = RECENT_AVOIDANCE_PERIODS,
) -> int:
    """Rate a candidate pairing: 0 never faced, 1 faced long ago, 2 faced recently."""
    ago = periods_since_last_faced(history_index, a, b, current_period_number)
    if ago == math.inf:
        return NEVER_FACED
    return FACED_LONG_AGO if ago > recent_avoidance_periods else FACED_RECENTLY


def compute_pairings(
    players: Sequence[RankedCompetitor],
    history: Sequence[HistoricalMatchup],
    current_period_number: int,
    params: PairingParameters | None = None,
) -> PairingResult:
    """Compute one period of 1v1 rivalry pairings.

    Competitors are swept from the top rank down. Each unpaired anchor looks
    for an opponent among the unpaired competitors directly below it:

    1. The window starts ``initial_window`` ranks deep and grows by
       ``window_step`` (capped at ``max_window``) only while it is empty.
    2. The first non-empty window decides. Within it the candidate with the
       lowest preference level wins, closest rank breaking ties.
    3. If nothing is free within ``max_window`` ranks, the whole remaining
       pool is searched for the opponent faced least recently (never faced
       counts as longest ago), closest rank breaking ties.

    With an odd number of competitors the lowest ranked one sits out as the
    bye before pairing starts.

    ``players`` must already be sorted by ``rank_score`` descending and carry
    unique IDs. Neither precondition is checked, and the inputs are never
    sorted or mutated here.

    Args:
        players: Ranked competitors, best first.
        history: Past matchups from any number of periods.
        current_period_number: Period being generated, used to measure recency.
        params: Window and recency tuning. Defaults to the module constants.

    Returns:
        Matchups in discovery order and the bye competitor ID, if any.
    """
    params = params or PairingParameters()
    history_index = build_history_index(history)

    eligible = list(players)
    bye: str | None = None
    if len(eligible) % 2 == 1:
        bye = eligible.pop().id

    rank_index = {p.id: i for i, p in enumerate(eligible)}
    paired: set[str] = set()
    matchups: list[Matchup] = []

    for i, current in enumerate(eligible):
        if current.id in paired:
            continue

        opponent = _search_window(
            eligible, i, paired, rank_index, history_index, current_period_number, params
        )
        if opponent is None:
            opponent = _search_remaining_pool(
                eligible, i, paired, rank_index, history_index, current_period_number
            )
        if opponent is None:
            continue

        matchups.append(Matchup(competitor_a=current.id, competitor_b=opponent.id))
        paired.add(current.id)
        paired.add(opponent.id)

    return PairingResult(matchups=matchups, bye=bye)


def _search_window(
    eligible: list[RankedCompetitor],
    anchor: int,
    paired: set[str],
    rank_index: dict[str, int],
    history_index: dict[PairKey, list[int]],
    current_period_number: int,
    params: PairingParameters,
) -> RankedCompetitor | None:
    """Pick the best candidate from the first non-empty window below ``anchor``."""
    current = eligible[anchor]
    window = params.initial_window

    while window <= params.max_window:
        candidates = [
            c for c in eligible[anchor + 1 : anchor + window + 1] if c.id not in paired
        ]
        if candidates:
            return min(
                candidates,
                key=lambda c: (
                    preference_level(
                        history_index,
                        current.id,
                        c.id,
                        current_period_number,
                        params.recent_avoidance_periods,
                    ),
                    rank_index[c.id] - anchor,
                ),
            )
        if window >= params.max_window:
            break
        window = min(window + params.window_step, params.max_window)

    return None


def _search_remaining_pool(
    eligible: list[RankedCompetitor],
    anchor: int,
    paired: set[str],
    rank_index: dict[str, int],
    history_index: dict[PairKey, list[int]],
    current_period_number: int,
) -> RankedCompetitor | None:
    """Pick the least recently faced unpaired competitor from anywhere in the pool."""
    current = eligible[anchor]
    remaining = [c for c in eligible if c.id not in paired and c.id != current.id]
    if not remaining:
        return None

    # min() keeps the first of equal keys, so rank order settles exact ties.
    return min(
        remaining,
        key=lambda c: (
            -periods_since_last_faced(history_index, current.id, c.id, current_period_number),
            abs(rank_index[c.id] - anchor),
        ),
    )


def matchups_to_history(
    result: PairingResult, period_number: int
) -> list[HistoricalMatchup]:
    """Turn a result into history records for later pairing runs."""
    return [
        HistoricalMatchup(
            competitor_a=m.competitor_a,
            competitor_b=m.competitor_b,
            period_number=period_number,
        )
        for m in result.matchups
    ]
