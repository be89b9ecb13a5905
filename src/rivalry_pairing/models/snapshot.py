"""Input snapshot records handed to the pairing service."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from rivalry_pairing.services.pairing.engine import HistoricalMatchup, RankedCompetitor


class PlayerRow(BaseModel):
    """A competitor and the points they are ranked by."""

    id: str
    total_points: float = 0.0

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or not v.strip():
            msg = "Player IDs cannot be empty"
            raise ValueError(msg)
        return v


class MatchupRecord(BaseModel):
    """A stored rivalry matchup from a past or current period."""

    player1_id: str
    player2_id: str
    period_number: int
    winner_id: str | None = None


class ActivityRow(BaseModel):
    """A synced activity contributing to period metrics.

    Distances are meters and moving time is seconds, as delivered by the
    activity provider.
    """

    user_id: str
    start_date: datetime
    distance: float | None = None
    moving_time: float | None = None
    elevation_gain: float | None = None
    suffer_score: float | None = None
    deleted: bool = False


class PairingSnapshot(BaseModel):
    """Everything the pairing service needs for one period."""

    period_number: int
    players: list[PlayerRow] = Field(default_factory=list)
    history: list[MatchupRecord] = Field(default_factory=list)
    activities: list[ActivityRow] = Field(default_factory=list)

    def ranked_competitors(self) -> list[RankedCompetitor]:
        """Players ordered by total points, best first.

        Equal points keep their snapshot order.
        """
        ranked = sorted(self.players, key=lambda p: p.total_points, reverse=True)
        return [RankedCompetitor(id=p.id, rank_score=p.total_points) for p in ranked]

    def historical_matchups(self) -> list[HistoricalMatchup]:
        """History records in the shape the pairing engine expects."""
        return [
            HistoricalMatchup(
                competitor_a=r.player1_id,
                competitor_b=r.player2_id,
                period_number=r.period_number,
            )
            for r in self.history
        ]
