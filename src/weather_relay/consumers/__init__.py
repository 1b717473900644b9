"""Kafka consumers for weather data."""

from .base import BaseConsumer, KafkaConsumerProtocol, MessageContext, MessageHandler
from .weather import WeatherSubscriber, handle_weather_message, process_weather_report

__all__ = [
    "BaseConsumer",
    "KafkaConsumerProtocol",
    "MessageContext",
    "MessageHandler",
    "WeatherSubscriber",
    "handle_weather_message",
    "process_weather_report",
]
