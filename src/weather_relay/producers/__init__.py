"""Kafka producers for weather data."""

from .base import BaseProducer, KafkaProducerProtocol
from .weather import WeatherPublisher

__all__ = [
    "BaseProducer",
    "KafkaProducerProtocol",
    "WeatherPublisher",
]
