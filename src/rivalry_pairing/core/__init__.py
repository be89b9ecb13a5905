"""Core configuration and errors for rivalry pairing."""

from rivalry_pairing.core.config import (
    PairingConfig,
    RivalryConfig,
    load_config,
)
from rivalry_pairing.core.errors import (
    ConfigurationError,
    MissingFieldError,
    SnapshotError,
    ValidationError,
)

__all__ = [
    "PairingConfig",
    "RivalryConfig",
    "load_config",
    "ConfigurationError",
    "MissingFieldError",
    "SnapshotError",
    "ValidationError",
]
