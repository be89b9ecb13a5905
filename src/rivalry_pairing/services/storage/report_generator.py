"""Markdown and JSON output for pairing results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from tabulate import tabulate

from rivalry_pairing.core.config import truncate_slug
from rivalry_pairing.services.pairing import PairingResult

from .paths import StoragePaths


def build_pairing_table(
    result: PairingResult,
    scores: dict[str, float],
    max_slug_length: int,
) -> str:
    """Render matchups as a github-flavored markdown table."""
    rows = [
        (
            i,
            truncate_slug(m.competitor_a, max_slug_length),
            f"{scores.get(m.competitor_a, 0.0):.1f}",
            truncate_slug(m.competitor_b, max_slug_length),
            f"{scores.get(m.competitor_b, 0.0):.1f}",
        )
        for i, m in enumerate(result.matchups, 1)
    ]
    return tabulate(
        rows,
        headers=("#", "Competitor A", "Points", "Competitor B", "Points"),
        tablefmt="github",
        disable_numparse=True,
    )


def result_to_dict(result: PairingResult, period_number: int) -> dict[str, Any]:
    """JSON-ready representation of a pairing result."""
    return {
        "period_number": period_number,
        "matchups": [
            {"player1_id": m.competitor_a, "player2_id": m.competitor_b}
            for m in result.matchups
        ],
        "bye_player_id": result.bye,
    }


class ReportGenerator:
    """Generate and persist pairing output files."""

    def __init__(self, paths: StoragePaths, max_slug_length: int) -> None:
        self._paths = paths
        self._max_slug_length = max_slug_length

    @staticmethod
    def _write_text(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    def save_markdown(
        self, period_number: int, result: PairingResult, scores: dict[str, float]
    ) -> Path:
        """Save a human-readable pairing report."""
        lines = [f"# Rivalry Pairings: Period {period_number}", ""]
        if result.matchups:
            lines.append(build_pairing_table(result, scores, self._max_slug_length))
        else:
            lines.append("No matchups generated.")
        if result.bye is not None:
            lines.extend(["", f"Bye: {truncate_slug(result.bye, self._max_slug_length)}"])

        path = self._paths.pairing_path(period_number, "pairings.md")
        self._write_text(path, "\n".join(lines) + "\n")
        return path

    def save_json(
        self,
        period_number: int,
        result: PairingResult,
        extra: dict[str, Any] | None = None,
    ) -> Path:
        """Export the result for the caller that persists matchups."""
        data = result_to_dict(result, period_number)
        if extra:
            data.update(extra)
        path = self._paths.pairing_path(period_number, "pairings.json")
        with path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, default=str)
        return path
