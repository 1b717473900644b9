"""Base consumer class with Kafka helpers."""

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from confluent_kafka import Consumer, KafkaError, Message

from ..config import KafkaConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageContext:
    """One delivered Kafka message with its metadata."""

    payload: bytes | None
    key: str | None
    topic: str
    partition: int
    offset: int

    @classmethod
    def from_message(cls, msg: Message) -> "MessageContext":
        """Build a context from a confluent-kafka message."""
        raw_key = msg.key()
        if isinstance(raw_key, bytes):
            key: str | None = raw_key.decode("utf-8", errors="replace")
        else:
            key = raw_key
        return cls(
            payload=msg.value(),
            key=key,
            topic=msg.topic(),
            partition=msg.partition(),
            offset=msg.offset(),
        )

    @property
    def payload_text(self) -> str:
        """Payload decoded for logging."""
        if self.payload is None:
            return ""
        if isinstance(self.payload, bytes):
            return self.payload.decode("utf-8", errors="replace")
        return str(self.payload)


# Handlers receive every delivered message; return values are ignored.
MessageHandler = Callable[[MessageContext], Any]


class KafkaConsumerProtocol(Protocol):
    """Protocol for Kafka consumer to allow mocking."""

    def subscribe(self, topics: list[str]) -> None: ...

    def poll(self, timeout: float = -1) -> Message | None: ...

    def close(self) -> None: ...


class BaseConsumer:
    """Polls a single Kafka topic and dispatches messages to a handler."""

    def __init__(
        self,
        kafka_config: KafkaConfig,
        handler: MessageHandler,
        consumer: KafkaConsumerProtocol | None = None,
    ) -> None:
        self.kafka_config = kafka_config
        self.handler = handler
        self._consumer = consumer
        self._subscribed = False
        self._stopping = threading.Event()

    @property
    def topic(self) -> str:
        return self.kafka_config.weather_topic

    @property
    def consumer(self) -> KafkaConsumerProtocol:
        """Lazy-initialize Kafka consumer."""
        if self._consumer is None:
            self._consumer = Consumer(
                {
                    "bootstrap.servers": self.kafka_config.bootstrap_servers,
                    "group.id": self.kafka_config.consumer_group_id,
                    "auto.offset.reset": self.kafka_config.auto_offset_reset,
                }
            )
        return self._consumer

    def subscribe(self) -> None:
        """Subscribe to the configured topic once."""
        if self._subscribed:
            return
        self.consumer.subscribe([self.topic])
        self._subscribed = True
        logger.info(
            "Subscribed to topic '%s' as group '%s'",
            self.topic,
            self.kafka_config.consumer_group_id,
        )

    def dispatch(self, msg: Message | None) -> bool:
        """Pass a polled message to the handler.

        Handler failures are logged and never propagate, so one bad message
        does not stop delivery of the next.

        Args:
            msg: Result of a consumer poll.

        Returns:
            True if a message was handed to the handler.
        """
        if msg is None:
            return False

        err = msg.error()
        if err is not None:
            if err.code() == KafkaError._PARTITION_EOF:
                logger.debug("Reached end of %s [%s]", msg.topic(), msg.partition())
            else:
                logger.error("Kafka consumer error: %s", err)
            return False

        context = MessageContext.from_message(msg)
        try:
            self.handler(context)
        except Exception as e:
            logger.error(
                "Handler failed for message from '%s' [%d] at offset %d: %s",
                context.topic,
                context.partition,
                context.offset,
                e,
                exc_info=True,
            )
        return True

    def poll_once(self, timeout: float | None = None) -> bool:
        """Poll for one message and dispatch it.

        Args:
            timeout: Seconds to wait, defaults to the configured poll timeout.

        Returns:
            True if a message was handed to the handler.
        """
        self.subscribe()
        if timeout is None:
            timeout = self.kafka_config.poll_timeout_seconds
        return self.dispatch(self.consumer.poll(timeout))

    def _poll_until_stopped(self, shutdown_event: asyncio.Event) -> None:
        """Worker thread body: poll and dispatch, then close from the same thread."""
        try:
            while not shutdown_event.is_set() and not self._stopping.is_set():
                self.poll_once()
        finally:
            self.close()

    async def run_forever(self, shutdown_event: asyncio.Event) -> None:
        """Poll until shutdown, then close the consumer.

        Polling, handlers and the final close all run in one worker thread,
        so the event loop stays free for timer ticks and the consumer is
        never closed while a poll is in progress. On cancellation the worker
        is asked to stop and awaited before the cancellation propagates.

        Args:
            shutdown_event: Event to signal shutdown.
        """
        self.subscribe()
        self._stopping.clear()
        worker = asyncio.ensure_future(asyncio.to_thread(self._poll_until_stopped, shutdown_event))
        try:
            await asyncio.shield(worker)
        except asyncio.CancelledError:
            self._stopping.set()
            await worker
            raise

    def close(self) -> None:
        """Leave the consumer group and release the client."""
        if self._consumer is not None:
            self._consumer.close()
            self._consumer = None
            self._subscribed = False
            logger.info("Closed consumer for topic '%s'", self.topic)
