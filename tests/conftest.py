"""Shared test fixtures for all tests."""

import pytest


@pytest.fixture
def sample_city() -> str:
    """City used as location and Kafka key in tests."""
    return "London"


@pytest.fixture
def london_payload() -> dict:
    """OpenWeather current weather response for London."""
    return {
        "name": "London",
        "main": {"temp": 15.5, "humidity": 60, "pressure": 1012},
        "weather": [{"main": "Clear", "description": "clear sky"}],
        "wind": {"speed": 3.2, "deg": 180},
    }
