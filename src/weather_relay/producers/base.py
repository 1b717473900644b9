"""Base producer class with Kafka helpers."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Protocol

from confluent_kafka import KafkaError, KafkaException, Message, Producer

from ..config import KafkaConfig
from ..errors import PublishError

logger = logging.getLogger(__name__)


class KafkaProducerProtocol(Protocol):
    """Protocol for Kafka producer to allow mocking."""

    def produce(
        self,
        topic: str,
        key: str | bytes | None = None,
        value: str | bytes | None = None,
        callback: object = None,
    ) -> None: ...

    def flush(self, timeout: float = -1) -> int: ...

    def poll(self, timeout: float = 0) -> int: ...


class BaseProducer(ABC):
    """Base class for producers publishing to a single Kafka topic."""

    def __init__(
        self,
        kafka_config: KafkaConfig,
        producer: KafkaProducerProtocol | None = None,
    ) -> None:
        self.kafka_config = kafka_config
        self._producer = producer

    @property
    def topic(self) -> str:
        return self.kafka_config.weather_topic

    @property
    def producer(self) -> KafkaProducerProtocol:
        """Lazy-initialize Kafka producer."""
        if self._producer is None:
            self._producer = Producer(
                {
                    "bootstrap.servers": self.kafka_config.bootstrap_servers,
                }
            )
        return self._producer

    def _delivery_callback(self, err: KafkaError | None, msg: Message) -> None:
        """Callback for Kafka delivery reports."""
        if err is not None:
            logger.error(
                "Message delivery to '%s' failed for key %s: %s",
                msg.topic(),
                msg.key(),
                err,
            )
        else:
            logger.debug(
                "Message delivered to %s [%s] at offset %s",
                msg.topic(),
                msg.partition(),
                msg.offset(),
            )

    def _produce(self, key: str, value: str) -> None:
        """Hand a message to the Kafka client without waiting for delivery.

        Raises:
            PublishError: If the client rejects the message (queue full,
                unknown topic, client closed).
        """
        try:
            self.producer.produce(
                topic=self.topic,
                key=key,
                value=value,
                callback=self._delivery_callback,
            )
            self.producer.poll(0)
        except (KafkaException, BufferError) as e:
            logger.error("Failed to publish to Kafka topic '%s' (key %s): %s", self.topic, key, e)
            raise PublishError(self.topic, key, f"Failed to publish to {self.topic}: {e}") from e

    def flush(self, timeout: float | None = None) -> None:
        """Flush pending messages to Kafka."""
        if timeout is None:
            timeout = self.kafka_config.flush_timeout_seconds
        remaining = self.producer.flush(timeout)
        if remaining > 0:
            logger.warning("Failed to flush %d messages", remaining)

    @abstractmethod
    async def run_once(self) -> None:
        """Fetch data and publish to Kafka once."""

    @abstractmethod
    async def run_forever(self, shutdown_event: asyncio.Event) -> None:
        """Run polling loop until shutdown is signaled."""

    @abstractmethod
    async def close(self) -> None:
        """Release clients and flush pending messages."""
