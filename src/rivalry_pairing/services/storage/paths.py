"""Path utilities for pairing artifacts."""

from __future__ import annotations

from pathlib import Path


class StoragePaths:
    """Build and create filesystem paths used by storage services."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir

    def period_dir(self, period_number: int) -> Path:
        """Get or create the directory for one period's artifacts."""
        path = self.base_dir / f"period_{period_number}"
        path.mkdir(parents=True, exist_ok=True)
        return path

    def pairing_path(self, period_number: int, filename: str) -> Path:
        """Build path to a pairing artifact file."""
        return self.period_dir(period_number) / filename
