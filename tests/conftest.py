"""Shared test fixtures for walkwage."""

import os
import tempfile
from datetime import date

import pytest

from walkwage.activity.models import WalkKind, WalkRecord


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "paths": {
            "data_dir": os.path.join(tmp_dir, "data"),
        },
        "rules": {
            "penalty": -250,
            "max_off_days_per_week": 1,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture
def walk():
    """Factory for WalkRecords owned by 'u1'."""

    def _walk(day: date | str, minutes: int = 0, kind: WalkKind | None = None, owner: str = "u1") -> WalkRecord:
        return WalkRecord(owner_id=owner, day=day, duration_minutes=minutes, explicit_kind=kind)

    return _walk
