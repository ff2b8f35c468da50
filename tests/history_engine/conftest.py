"""Shared fixtures for engine tests."""

import pytest

from src.history_engine import ElementVersion


@pytest.fixture
def make_version():
    """Factory for ElementVersion snapshots with sensible defaults."""
    def _make(version: int, element_type: str = "node", **fields) -> ElementVersion:
        data = {
            "type": element_type,
            "id": 1,
            "version": version,
            "timestamp": f"2020-01-{version:02d}T00:00:00Z",
            "changeset": 1000 + version,
            "user": "mapper",
            "uid": 1,
        }
        data.update(fields)
        return ElementVersion.model_validate(data)

    return _make
