"""Fixtures for schema unit tests."""

import pytest


@pytest.fixture
def minimal_payload() -> dict:
    """Weather document with only the location name."""
    return {"name": "Reykjavik"}


@pytest.fixture
def multi_condition_payload() -> dict:
    """Weather document reporting two simultaneous conditions."""
    return {
        "name": "Bergen",
        "main": {"temp": 4.0, "humidity": 93, "pressure": 998.5},
        "weather": [
            {"main": "Rain", "description": "light rain"},
            {"main": "Mist", "description": "mist"},
        ],
        "wind": {"speed": 7.4, "deg": 250},
    }
