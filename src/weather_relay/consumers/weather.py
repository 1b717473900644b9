"""Weather report consumer."""

import logging

from ..config import KafkaConfig
from ..errors import SerializationError
from ..schemas import WeatherReport
from .base import BaseConsumer, KafkaConsumerProtocol, MessageContext, MessageHandler

logger = logging.getLogger(__name__)


def process_weather_report(report: WeatherReport) -> None:
    """Act on a received report.

    Currently only logs the key metrics. Downstream processing (storage,
    alerting) plugs in here.
    """
    logger.info(
        "Processing weather data for city: %s with temperature: %s",
        report.location_name,
        report.display_temperature(),
    )


def handle_weather_message(context: MessageContext) -> WeatherReport | None:
    """Deserialize and process one weather message.

    Args:
        context: Delivered message and its metadata.

    Returns:
        The parsed report, or None if the payload was not a weather report.
    """
    logger.info(
        "Received message from topic '%s', partition %d, offset %d, key: %s",
        context.topic,
        context.partition,
        context.offset,
        context.key,
    )

    try:
        report = WeatherReport.from_json(context.payload)
    except SerializationError as e:
        logger.error(
            "Error processing weather data message: %s - %s: %s",
            context.payload_text,
            type(e).__name__,
            e,
        )
        return None

    logger.info("Processing weather data: %s", report)
    process_weather_report(report)
    return report


class WeatherSubscriber(BaseConsumer):
    """Consumes the weather topic and logs each report."""

    def __init__(
        self,
        kafka_config: KafkaConfig | None = None,
        handler: MessageHandler | None = None,
        consumer: KafkaConsumerProtocol | None = None,
    ) -> None:
        super().__init__(
            kafka_config or KafkaConfig(),
            handler or handle_weather_message,
            consumer,
        )
