"""Pairing service for generating a period's rivalry matchups."""

from __future__ import annotations

from pathlib import Path

import structlog

from rivalry_pairing.core.config import RivalryConfig
from rivalry_pairing.models import PairingSnapshot
from rivalry_pairing.services.pairing.engine import (
    PairingResult,
    build_history_index,
    compute_pairings,
    periods_since_last_faced,
)
from rivalry_pairing.services.storage import SnapshotStore

logger = structlog.get_logger()


class PairingService:
    """Orchestrates snapshot loading, pairing, and artifact persistence.

    The service is the caller side of the pairing engine: it turns a
    snapshot into ranked competitors and history, runs one pairing pass with
    the configured parameters, and hands the result to storage.
    """

    def __init__(self, config: RivalryConfig, store: SnapshotStore | None = None) -> None:
        """Initialize pairing service.

        Args:
            config: Rivalry configuration.
            store: Storage for snapshots and artifacts. Built from config if None.
        """
        self.config = config
        self.store = store or SnapshotStore(config)

    def generate(self, snapshot: PairingSnapshot) -> PairingResult:
        """Compute pairings for the snapshot's period."""
        players = snapshot.ranked_competitors()
        history = snapshot.historical_matchups()
        period = snapshot.period_number

        logger.info(
            "pairing_started",
            period=period,
            players=len(players),
            history=len(history),
        )
        result = compute_pairings(players, history, period, self.config.pairing.to_parameters())

        repeats = self._log_recent_repeats(snapshot, result)
        logger.info(
            "pairing_completed",
            period=period,
            matchups=len(result.matchups),
            bye=result.bye,
            recent_repeats=repeats,
        )
        return result

    def run(self, snapshot_path: str | Path) -> tuple[PairingResult, Path]:
        """Load a snapshot, pair it, and save the artifacts.

        Returns:
            Tuple of (result, artifact_directory).
        """
        snapshot = self.store.load(snapshot_path)
        result = self.generate(snapshot)
        output_dir = self.store.save_result(snapshot, result)
        return result, output_dir

    def _log_recent_repeats(self, snapshot: PairingSnapshot, result: PairingResult) -> int:
        """Warn about matchups that repeat within the avoidance horizon."""
        history_index = build_history_index(snapshot.historical_matchups())
        horizon = self.config.pairing.recent_avoidance_periods
        repeats = 0
        for m in result.matchups:
            ago = periods_since_last_faced(
                history_index, m.competitor_a, m.competitor_b, snapshot.period_number
            )
            if ago <= horizon:
                repeats += 1
                logger.warning(
                    "pairing_repeat",
                    period=snapshot.period_number,
                    competitor_a=m.competitor_a,
                    competitor_b=m.competitor_b,
                    periods_ago=ago,
                )
        return repeats
