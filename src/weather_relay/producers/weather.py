"""Weather report producer for Kafka."""

import asyncio
import logging

from ..clients.openweather import OpenWeatherClient
from ..config import KafkaConfig, OpenWeatherConfig, WeatherConfig
from ..errors import SerializationError, WeatherRelayError
from ..schemas import WeatherReport
from .base import BaseProducer, KafkaProducerProtocol

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


def _preview(message: str) -> str:
    if len(message) <= PREVIEW_LENGTH:
        return message
    return message[:PREVIEW_LENGTH] + "..."


class WeatherPublisher(BaseProducer):
    """Producer that fetches current weather and publishes it to Kafka.

    Messages are keyed by location name so reports for the same city land on
    the same partition.
    """

    def __init__(
        self,
        client: OpenWeatherClient | None = None,
        kafka_config: KafkaConfig | None = None,
        openweather_config: OpenWeatherConfig | None = None,
        weather_config: WeatherConfig | None = None,
        producer: KafkaProducerProtocol | None = None,
    ) -> None:
        kafka_config = kafka_config or KafkaConfig()
        super().__init__(kafka_config, producer)

        self.openweather_config = openweather_config or OpenWeatherConfig()
        self.weather_config = weather_config or WeatherConfig()
        self._client = client
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def client(self) -> OpenWeatherClient:
        """Lazy-initialize OpenWeather client."""
        if self._client is None:
            self._client = OpenWeatherClient(self.openweather_config)
        return self._client

    async def fetch_and_publish(self, location: str | None = None) -> WeatherReport:
        """Fetch current weather for a location and publish it.

        Args:
            location: City name, defaults to the configured default city.

        Returns:
            The report that was published.

        Raises:
            UpstreamFetchError: If the weather API call fails. Nothing is published.
            SerializationError: If the response is not a weather document.
            PublishError: If the Kafka client rejects the message.
        """
        location = location or self.weather_config.default_city
        try:
            report = await self.client.get_current_weather(location)
        except SerializationError as e:
            logger.error("Unreadable weather document for %s: %s", location, e)
            raise

        message = report.to_json()
        self._produce(key=location, value=message)
        logger.info("Sent weather data to Kafka topic '%s': %s", self.topic, _preview(message))
        return report

    async def fetch_and_publish_raw(self, location: str | None = None) -> str:
        """Fetch current weather and publish the response body unchanged.

        The body is still checked to be a weather document before publishing.

        Args:
            location: City name, defaults to the configured default city.

        Returns:
            The raw JSON body that was published.
        """
        location = location or self.weather_config.default_city
        body = await self.client.get_current_weather_raw(location)
        try:
            WeatherReport.from_json(body)
        except SerializationError as e:
            logger.error("Unreadable weather document for %s: %s", location, e)
            raise

        self._produce(key=location, value=body)
        logger.info("Sent raw weather data to Kafka topic '%s': %s", self.topic, _preview(body))
        return body

    def publish(self, report: WeatherReport) -> None:
        """Publish a caller-supplied report without fetching.

        Args:
            report: Report to publish, keyed by its location name.
        """
        message = report.to_json()
        self._produce(key=report.kafka_key(), value=message)
        logger.info("Sent weather data to Kafka topic '%s': %s", self.topic, _preview(message))

    async def _scheduled_fetch(self, location: str) -> None:
        """One timer tick. Never raises."""
        try:
            await self.fetch_and_publish(location)
        except WeatherRelayError as e:
            logger.error("Scheduled fetch failed for %s: %s", location, e)
        except Exception as e:
            logger.error("Scheduled fetch failed for %s: %s", location, e, exc_info=True)
        else:
            logger.info("Scheduled fetch completed for %s", location)

    async def run_once(self) -> None:
        """Fetch the default city once, publish, and flush."""
        await self._scheduled_fetch(self.weather_config.default_city)
        self.flush()

    async def run_forever(self, shutdown_event: asyncio.Event) -> None:
        """Fetch the default city at a fixed rate until shutdown.

        Each tick runs as its own task, so a slow or failing fetch does not
        delay the next tick. In-flight ticks are awaited before returning.

        Args:
            shutdown_event: Event to signal shutdown.
        """
        location = self.weather_config.default_city
        interval = self.weather_config.fetch_interval_seconds
        logger.info(
            "Starting weather publisher for %s with %s second interval",
            location,
            interval,
        )

        while not shutdown_event.is_set():
            task = asyncio.create_task(self._scheduled_fetch(location), name=f"fetch-{location}")
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

            try:
                await asyncio.wait_for(shutdown_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue

        if self._pending:
            logger.info("Waiting for %d in-flight fetches", len(self._pending))
            await asyncio.gather(*self._pending, return_exceptions=True)

    async def close(self) -> None:
        """Clean up resources."""
        if self._client is not None:
            await self._client.close()
        if self._producer is not None:
            self.flush()
