"""Shared fixtures for rivalry pairing tests."""

import json

import pytest
import yaml

from rivalry_pairing.core.config import RivalryConfig


@pytest.fixture
def snapshot_data():
    """Five ranked players with one recent matchup."""
    return {
        "period_number": 5,
        "players": [
            {"id": "dana", "total_points": 70},
            {"id": "alex", "total_points": 100},
            {"id": "casey", "total_points": 80},
            {"id": "blair", "total_points": 90},
            {"id": "eli", "total_points": 60},
        ],
        "history": [
            {"player1_id": "blair", "player2_id": "alex", "period_number": 3, "winner_id": "alex"},
        ],
    }


@pytest.fixture
def snapshot_yaml(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.yaml"
    path.write_text(yaml.safe_dump(snapshot_data))
    return path


@pytest.fixture
def snapshot_json(tmp_path, snapshot_data):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot_data))
    return path


@pytest.fixture
def rivalry_config(tmp_path):
    return RivalryConfig(output_dir=str(tmp_path / "runs"))
