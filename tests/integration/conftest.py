"""Integration test fixtures - requires running Kafka."""

import os
import uuid

import pytest


@pytest.fixture
def kafka_bootstrap_servers() -> str:
    """Kafka broker address for integration tests."""
    servers = os.environ.get("KAFKA_INTEGRATION_BOOTSTRAP_SERVERS")
    if not servers:
        pytest.skip("KAFKA_INTEGRATION_BOOTSTRAP_SERVERS not set")
    return servers


@pytest.fixture
def test_topic() -> str:
    """Unique topic per test to avoid collisions."""
    return f"test.weather.{uuid.uuid4().hex[:8]}"
