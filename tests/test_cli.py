"""Tests for the command line interface."""

import yaml
from typer.testing import CliRunner

from rivalry_pairing import __version__
from rivalry_pairing.cli import app

runner = CliRunner()


class TestPairCommand:
    """Tests for `rivalry-pairing pair`."""

    def test_pair_prints_matchups_and_bye(self, snapshot_yaml, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(app, ["pair", str(snapshot_yaml), "--output-dir", str(out_dir)])

        assert result.exit_code == 0, result.output
        for player in ("alex", "blair", "casey", "dana"):
            assert player in result.output
        assert "Bye:" in result.output
        assert (out_dir / "period_5" / "pairings.json").exists()

    def test_pair_no_save(self, snapshot_json, tmp_path):
        out_dir = tmp_path / "out"
        result = runner.invoke(
            app, ["pair", str(snapshot_json), "--output-dir", str(out_dir), "--no-save"]
        )

        assert result.exit_code == 0, result.output
        assert not out_dir.exists()

    def test_pair_missing_snapshot(self, tmp_path):
        result = runner.invoke(app, ["pair", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_pair_invalid_snapshot(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("period_number: 1\n")
        result = runner.invoke(app, ["pair", str(path), "--no-save"])
        assert result.exit_code == 1
        assert "Configuration Error" in result.output


class TestStandingsCommand:
    """Tests for `rivalry-pairing standings`."""

    def _write_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "periods": [
                        {
                            "period_number": 5,
                            "start_date": "2026-03-02",
                            "end_date": "2026-03-15",
                            "metric": "distance",
                            "metric_label": "Distance",
                            "metric_unit": "km",
                        }
                    ]
                }
            )
        )
        return path

    def test_standings_shows_leader(self, tmp_path, snapshot_data):
        snapshot_data["history"].append(
            {"player1_id": "alex", "player2_id": "casey", "period_number": 5}
        )
        snapshot_data["activities"] = [
            {"user_id": "alex", "start_date": "2026-03-03T07:00:00Z", "distance": 12000},
            {"user_id": "casey", "start_date": "2026-03-04T07:00:00Z", "distance": 8000},
        ]
        snapshot = tmp_path / "snapshot.yaml"
        snapshot.write_text(yaml.safe_dump(snapshot_data))

        result = runner.invoke(
            app,
            [
                "standings",
                str(snapshot),
                "--config",
                str(self._write_config(tmp_path)),
                "--today",
                "2026-03-10",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "12.0 km" in result.output
        assert "8.0 km" in result.output

    def test_standings_outside_schedule(self, tmp_path, snapshot_yaml):
        result = runner.invoke(
            app,
            [
                "standings",
                str(snapshot_yaml),
                "--config",
                str(self._write_config(tmp_path)),
                "--today",
                "2027-01-01",
            ],
        )

        assert result.exit_code == 0
        assert "No active rivalry period" in result.output


class TestOtherCommands:
    """Tests for validate, info, and version."""

    def test_validate(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"pairing": {"max_window": 12}}))
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 0
        assert "Max window: 12" in result.output

    def test_validate_invalid(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"pairing": {"initial_window": 6, "max_window": 3}}))
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1

    def test_info(self):
        result = runner.invoke(app, ["info"])
        assert result.exit_code == 0
        assert "rivalry-pairing pair" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
