"""Unit test fixtures - mocks and sample data."""

from unittest.mock import MagicMock

import pytest

from weather_relay.config import KafkaConfig, OpenWeatherConfig, WeatherConfig


@pytest.fixture
def kafka_config() -> KafkaConfig:
    """Kafka configuration for testing."""
    return KafkaConfig(
        bootstrap_servers="localhost:9092",
        weather_topic="test.weather",
        consumer_group_id="test-weather-group",
        poll_timeout_seconds=0.01,
    )


@pytest.fixture
def openweather_config() -> OpenWeatherConfig:
    """OpenWeather configuration for testing."""
    return OpenWeatherConfig(
        api_key="test-key",
        base_url="https://api.openweathermap.org/data/2.5/weather",
    )


@pytest.fixture
def weather_config() -> WeatherConfig:
    """Scheduled fetch configuration for testing."""
    return WeatherConfig(default_city="London", fetch_interval_seconds=0.05)


@pytest.fixture
def mock_kafka_producer() -> MagicMock:
    """Mock Kafka producer."""
    producer = MagicMock()
    producer.produce = MagicMock()
    producer.flush = MagicMock(return_value=0)
    producer.poll = MagicMock(return_value=0)
    return producer


@pytest.fixture
def extended_london_payload(london_payload: dict) -> dict:
    """London response with the extra fields the real API returns."""
    return {
        "coord": {"lon": -0.1257, "lat": 51.5085},
        "base": "stations",
        "visibility": 10000,
        "dt": 1705320000,
        "sys": {"country": "GB", "sunrise": 1705305600, "sunset": 1705335600},
        "timezone": 0,
        "id": 2643743,
        "cod": 200,
        **london_payload,
        "main": {**london_payload["main"], "feels_like": 14.9, "temp_min": 14.0},
        "weather": [{"id": 800, "icon": "01d", **london_payload["weather"][0]}],
        "wind": {**london_payload["wind"], "gust": 5.1},
    }
