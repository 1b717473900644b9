"""Configuration settings loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class KafkaConfig(BaseSettings):
    """Kafka connection and topic configuration."""

    bootstrap_servers: str = "localhost:9092"
    weather_topic: str = "weather"
    topic_partitions: int = 1
    topic_replication_factor: int = 1
    consumer_group_id: str = "weather-group"
    auto_offset_reset: str = "earliest"
    poll_timeout_seconds: float = 1.0
    flush_timeout_seconds: float = 10.0

    model_config = {"env_prefix": "KAFKA_"}


class OpenWeatherConfig(BaseSettings):
    """OpenWeather current weather API configuration."""

    api_key: str = ""
    base_url: str = "https://api.openweathermap.org/data/2.5/weather"
    units: str = "metric"
    timeout_seconds: float = 30.0

    model_config = {"env_prefix": "OPENWEATHER_"}


class WeatherConfig(BaseSettings):
    """Scheduled fetch configuration."""

    default_city: str = "London"
    fetch_interval_seconds: float = 30.0

    model_config = {"env_prefix": "WEATHER_"}


class Settings(BaseSettings):
    """Application settings combining all configs."""

    log_level: str = "INFO"
    kafka: KafkaConfig = Field(default_factory=KafkaConfig)
    openweather: OpenWeatherConfig = Field(default_factory=OpenWeatherConfig)
    weather: WeatherConfig = Field(default_factory=WeatherConfig)


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
