"""Kafka topic provisioning."""

import logging
from typing import Protocol

from confluent_kafka import KafkaError, KafkaException
from confluent_kafka.admin import AdminClient, NewTopic

from .config import KafkaConfig

logger = logging.getLogger(__name__)


class KafkaAdminProtocol(Protocol):
    """Protocol for Kafka admin client to allow mocking."""

    def create_topics(self, new_topics: list[NewTopic], **kwargs: object) -> dict: ...


def ensure_weather_topic(
    kafka_config: KafkaConfig,
    admin: KafkaAdminProtocol | None = None,
    timeout: float = 30.0,
) -> bool:
    """Create the weather topic if it does not exist.

    Args:
        kafka_config: Kafka settings with topic name, partitions and replication.
        admin: Optional admin client for testing.
        timeout: Seconds to wait for the broker to confirm.

    Returns:
        True if the topic was created, False if it already existed.

    Raises:
        KafkaException: For any failure other than the topic already existing.
    """
    if admin is None:
        admin = AdminClient({"bootstrap.servers": kafka_config.bootstrap_servers})

    topic = NewTopic(
        kafka_config.weather_topic,
        num_partitions=kafka_config.topic_partitions,
        replication_factor=kafka_config.topic_replication_factor,
    )
    futures = admin.create_topics([topic], request_timeout=timeout)

    try:
        futures[kafka_config.weather_topic].result(timeout=timeout)
    except KafkaException as e:
        err = e.args[0] if e.args else None
        if isinstance(err, KafkaError) and err.code() == KafkaError.TOPIC_ALREADY_EXISTS:
            logger.info("Topic '%s' already exists", kafka_config.weather_topic)
            return False
        logger.error("Failed to create topic '%s': %s", kafka_config.weather_topic, e)
        raise

    logger.info(
        "Created topic '%s' (%d partitions, replication factor %d)",
        kafka_config.weather_topic,
        kafka_config.topic_partitions,
        kafka_config.topic_replication_factor,
    )
    return True
