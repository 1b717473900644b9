"""Build publisher and subscriber from explicit settings."""

from .clients import OpenWeatherClient
from .config import Settings
from .consumers import KafkaConsumerProtocol, MessageHandler, WeatherSubscriber
from .producers import KafkaProducerProtocol, WeatherPublisher


def build_publisher(
    settings: Settings,
    producer: KafkaProducerProtocol | None = None,
    client: OpenWeatherClient | None = None,
) -> WeatherPublisher:
    """Create a WeatherPublisher wired to the configured API and topic."""
    return WeatherPublisher(
        client=client or OpenWeatherClient(settings.openweather),
        kafka_config=settings.kafka,
        openweather_config=settings.openweather,
        weather_config=settings.weather,
        producer=producer,
    )


def build_subscriber(
    settings: Settings,
    handler: MessageHandler | None = None,
    consumer: KafkaConsumerProtocol | None = None,
) -> WeatherSubscriber:
    """Create a WeatherSubscriber for the configured topic.

    Args:
        settings: Application settings.
        handler: Message handler, defaults to logging each weather report.
        consumer: Optional Kafka consumer for testing.
    """
    return WeatherSubscriber(
        kafka_config=settings.kafka,
        handler=handler,
        consumer=consumer,
    )
