"""Weather report schemas.

Pydantic models for upstream parsing and Kafka message serialization.
"""

from .weather import MainMetrics, WeatherCondition, WeatherReport, Wind

__all__ = [
    "MainMetrics",
    "WeatherCondition",
    "WeatherReport",
    "Wind",
]
