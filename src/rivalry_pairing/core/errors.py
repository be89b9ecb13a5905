"""Custom exceptions for configuration and input errors."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Base exception for configuration errors with optional suggestions."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"[Configuration Error] {self.message}"
        if self.suggestion:
            msg += f"\n[Suggestion] {self.suggestion}"
        return msg


class MissingFieldError(ConfigurationError):
    """Error when a required configuration field is missing."""

    def __init__(self, field: str, config_path: str) -> None:
        super().__init__(
            f"Missing required field '{field}' in {config_path}",
            "Add the field to your configuration.",
        )


class ValidationError(ConfigurationError):
    """Error when configuration validation fails."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(
            f"Invalid value for '{field}'",
            f"{reason}",
        )


class SnapshotError(ConfigurationError):
    """Error when a pairing snapshot file cannot be used."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            f"Unusable snapshot {path}: {reason}",
            "Provide 'period_number' and a 'players' list of {id, total_points} entries.",
        )
