"""Weather Relay - OpenWeather current weather over Kafka.

This package fetches current weather from the OpenWeather API, publishes it
to a Kafka topic keyed by city, and consumes the topic to log each report:

- WeatherPublisher: scheduled or on-demand fetch and publish
- WeatherSubscriber: deserializes and logs delivered reports

Usage:
    from weather_relay import build_publisher, build_subscriber, get_settings
    from weather_relay.schemas import WeatherReport
"""

__version__ = "0.1.0"

from .config import Settings, get_settings
from .consumers import MessageContext, WeatherSubscriber
from .errors import PublishError, SerializationError, UpstreamFetchError, WeatherRelayError
from .factory import build_publisher, build_subscriber
from .producers import WeatherPublisher
from .schemas import WeatherReport

__all__ = [
    "MessageContext",
    "PublishError",
    "SerializationError",
    "Settings",
    "UpstreamFetchError",
    "WeatherPublisher",
    "WeatherRelayError",
    "WeatherReport",
    "WeatherSubscriber",
    "build_publisher",
    "build_subscriber",
    "get_settings",
]
