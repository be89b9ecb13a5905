"""Tests for configuration loading and validation."""

import tempfile
from datetime import date
from pathlib import Path

import pydantic
import pytest
import yaml

from rivalry_pairing.core.config import PairingConfig, RivalryConfig, load_config, truncate_slug
from rivalry_pairing.core.errors import ConfigurationError, MissingFieldError, ValidationError
from rivalry_pairing.models import RivalryPeriod
from rivalry_pairing.services.pairing.engine import (
    DELTA,
    K0,
    KMAX,
    RECENT_AVOIDANCE_PERIODS,
    PairingParameters,
)


class TestPairingConfig:
    """Tests for PairingConfig."""

    def test_defaults_match_engine_constants(self):
        """Test defaults mirror the engine's tuning constants."""
        config = PairingConfig()
        assert config.initial_window == K0
        assert config.window_step == DELTA
        assert config.max_window == KMAX
        assert config.recent_avoidance_periods == RECENT_AVOIDANCE_PERIODS

    def test_to_parameters(self):
        """Test conversion to engine parameters."""
        config = PairingConfig(initial_window=2, window_step=2, max_window=6)
        assert config.to_parameters() == PairingParameters(
            initial_window=2, window_step=2, max_window=6, recent_avoidance_periods=2
        )

    def test_max_window_below_initial_fails(self):
        """Test a cap smaller than the starting window is rejected."""
        with pytest.raises(pydantic.ValidationError, match="max_window must be at least"):
            PairingConfig(initial_window=5, max_window=3)

    def test_zero_window_fails(self):
        """Test windows must be positive."""
        with pytest.raises(pydantic.ValidationError):
            PairingConfig(initial_window=0)


class TestRivalryConfig:
    """Tests for RivalryConfig."""

    def test_minimal_valid_config(self):
        """Test empty configuration uses defaults."""
        config = RivalryConfig()
        assert config.pairing == PairingConfig()
        assert config.periods == []
        assert config.output_dir == "./runs"

    def test_duplicate_period_numbers_fail(self):
        """Test period numbers must be unique."""
        period = {"period_number": 1, "start_date": "2026-01-05", "end_date": "2026-01-18"}
        with pytest.raises(pydantic.ValidationError, match="unique"):
            RivalryConfig(periods=[period, period])

    def test_periods_sorted_and_looked_up(self):
        """Test periods are ordered by number and retrievable."""
        config = RivalryConfig(
            periods=[
                {"period_number": 2, "start_date": "2026-01-19", "end_date": "2026-02-01"},
                {"period_number": 1, "start_date": "2026-01-05", "end_date": "2026-01-18"},
            ]
        )
        assert [p.period_number for p in config.periods] == [1, 2]
        assert config.get_period(2).start_date == date(2026, 1, 19)
        assert config.get_period(3) is None


class TestRivalryPeriod:
    """Tests for RivalryPeriod."""

    def test_end_before_start_fails(self):
        """Test inverted date ranges are rejected."""
        with pytest.raises(pydantic.ValidationError, match="end_date"):
            RivalryPeriod(
                period_number=1, start_date=date(2026, 2, 1), end_date=date(2026, 1, 1)
            )

    def test_unknown_metric_fails(self):
        """Test metric must be a supported activity field."""
        with pytest.raises(pydantic.ValidationError):
            RivalryPeriod(
                period_number=1,
                start_date=date(2026, 1, 1),
                end_date=date(2026, 1, 14),
                metric="calories",
            )


class TestLoadConfig:
    """Tests for config file loading."""

    def test_load_valid_yaml(self):
        """Test loading a valid YAML config."""
        config_data = {
            "pairing": {"initial_window": 2, "recent_avoidance_periods": 3},
            "periods": [
                {
                    "period_number": 1,
                    "start_date": "2026-01-05",
                    "end_date": "2026-01-18",
                    "metric": "moving_time",
                    "metric_label": "Moving Time",
                    "metric_unit": "h",
                }
            ],
            "output_dir": "./out",
        }

        with tempfile.NamedTemporaryFile(suffix=".yaml", delete=False, mode="w") as f:
            yaml.dump(config_data, f)
            f.flush()

            config = load_config(f.name)
            assert config.pairing.initial_window == 2
            assert config.pairing.recent_avoidance_periods == 3
            assert config.periods[0].metric == "moving_time"
            assert config.output_dir == "./out"

        Path(f.name).unlink()

    def test_load_empty_file_uses_defaults(self, tmp_path):
        """Test an empty YAML file yields the default configuration."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == RivalryConfig()

    def test_load_non_mapping_fails(self, tmp_path):
        """Test a YAML list at the top level is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_load_missing_file_fails(self):
        """Test loading missing file raises error."""
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/config.yaml")


class TestErrors:
    """Tests for error formatting."""

    def test_suggestion_included(self):
        error = MissingFieldError("players", "snapshot.yaml")
        assert isinstance(error, ConfigurationError)
        assert "[Configuration Error] Missing required field 'players'" in str(error)
        assert "[Suggestion]" in str(error)

    def test_truncate_slug(self):
        assert truncate_slug("abcdef", 3) == "abc"
        assert truncate_slug("ab", 3) == "ab"
