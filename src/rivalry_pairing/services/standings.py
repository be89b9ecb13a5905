"""Live standings for rivalry periods: metric totals, winners, and kill marks."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import UTC, date, datetime, time

from rivalry_pairing.models import ActivityRow, MatchupRecord, RivalryMetric, RivalryPeriod
from rivalry_pairing.services.pairing import Matchup

METERS_PER_KM = 1000
SECONDS_PER_HOUR = 3600
MINUTES_PER_HOUR = 60


def find_current_period(
    periods: Iterable[RivalryPeriod], today: date
) -> RivalryPeriod | None:
    """Return the period whose date range contains ``today``, if any."""
    return next((p for p in periods if p.contains(today)), None)


def _metric_value(activity: ActivityRow, metric: RivalryMetric) -> float:
    return getattr(activity, metric) or 0.0


def _period_bounds(period: RivalryPeriod) -> tuple[datetime, datetime]:
    start = datetime.combine(period.start_date, time(0, 0, 0), tzinfo=UTC)
    end = datetime.combine(period.end_date, time(23, 59, 59), tzinfo=UTC)
    return start, end


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def aggregate_metric(
    activities: Iterable[ActivityRow],
    period: RivalryPeriod,
    competitor_ids: Iterable[str],
) -> dict[str, float]:
    """Sum the period's metric per competitor in display units.

    Only non-deleted activities starting inside the period count. Distance is
    reported in km and moving time in hours; values are rounded to 2 decimals.
    Naive timestamps are treated as UTC.

    Args:
        activities: Synced activities, any users and dates.
        period: Period whose metric and date range apply.
        competitor_ids: Competitors to report on.

    Returns:
        Mapping of competitor ID to total, 0.0 for competitors with no activity.
    """
    wanted = set(competitor_ids)
    start, end = _period_bounds(period)
    raw: dict[str, float] = defaultdict(float)

    for activity in activities:
        if activity.deleted or activity.user_id not in wanted:
            continue
        if not start <= _as_utc(activity.start_date) <= end:
            continue
        raw[activity.user_id] += _metric_value(activity, period.metric)

    totals = {}
    for competitor_id in wanted:
        value = raw.get(competitor_id, 0.0)
        if period.metric == "distance":
            value = value / METERS_PER_KM
        elif period.metric == "moving_time":
            value = value / SECONDS_PER_HOUR
        totals[competitor_id] = round(value, 2)
    return totals


def decide_winner(matchup: Matchup, totals: dict[str, float]) -> str | None:
    """Competitor with the higher total, or None on a tie."""
    a = totals.get(matchup.competitor_a, 0.0)
    b = totals.get(matchup.competitor_b, 0.0)
    if a > b:
        return matchup.competitor_a
    if b > a:
        return matchup.competitor_b
    return None


def kill_marks(records: Iterable[MatchupRecord]) -> dict[str, int]:
    """Count all-time rivalry wins per competitor. Ties carry no winner."""
    marks: dict[str, int] = defaultdict(int)
    for record in records:
        if record.winner_id:
            marks[record.winner_id] += 1
    return dict(marks)


def rival_lookup(matchups: Iterable[Matchup]) -> dict[str, str]:
    """Map each competitor to their opponent for the period."""
    rivals: dict[str, str] = {}
    for m in matchups:
        rivals[m.competitor_a] = m.competitor_b
        rivals[m.competitor_b] = m.competitor_a
    return rivals


def format_metric_value(value: float, metric: RivalryMetric, unit: str) -> str:
    """Format a metric total for display."""
    if metric == "moving_time":
        hours = int(value)
        minutes = round((value - hours) * MINUTES_PER_HOUR)
        if hours == 0:
            return f"{minutes}m"
        if minutes == 0:
            return f"{hours}h"
        return f"{hours}h {minutes}m"
    if metric == "distance":
        return f"{value:.1f} {unit}".rstrip()
    return f"{round(value)} {unit}".rstrip()
