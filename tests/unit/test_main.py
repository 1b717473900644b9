"""Unit tests for main entry point."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from confluent_kafka import KafkaError, KafkaException

from weather_relay.config import Settings, WeatherConfig
from weather_relay.errors import UpstreamFetchError
from weather_relay.main import (
    main,
    parse_args,
    publish_once,
    run_publisher,
    run_subscriber,
    setup_logging,
    with_default_city,
)


class TestParseArgs:
    def test_run_command(self):
        """Test default argument values."""
        args = parse_args(["run"])

        assert args.command == "run"
        assert args.city is None
        assert args.log_level == "INFO"

    def test_produce_once(self):
        """Test --once flag."""
        args = parse_args(["produce", "--once", "--city", "Paris"])

        assert args.command == "produce"
        assert args.once is True
        assert args.city == "Paris"

    def test_publish_requires_city(self):
        with pytest.raises(SystemExit):
            parse_args(["publish"])

    def test_publish_raw(self):
        args = parse_args(["publish", "--city", "Berlin", "--raw"])

        assert args.city == "Berlin"
        assert args.raw is True

    def test_log_level_arg(self):
        """Test --log-level argument."""
        args = parse_args(["--log-level", "DEBUG", "consume"])

        assert args.log_level == "DEBUG"
        assert args.command == "consume"

    def test_command_required(self):
        with pytest.raises(SystemExit):
            parse_args([])


class TestSetupLogging:
    def test_setup_logging_info(self):
        """Test logging setup with INFO level."""
        setup_logging("INFO")

    def test_setup_logging_debug(self):
        """Test logging setup with DEBUG level."""
        setup_logging("DEBUG")


class TestWithDefaultCity:
    def test_override(self):
        settings = Settings(weather=WeatherConfig(default_city="London"))

        updated = with_default_city(settings, "Paris")

        assert updated.weather.default_city == "Paris"
        assert settings.weather.default_city == "London"

    def test_no_override(self):
        settings = Settings()
        assert with_default_city(settings, None) is settings


class TestRunPublisher:
    @pytest.mark.asyncio
    async def test_run_publisher_once(self):
        """Test running publisher once."""
        publisher = AsyncMock()

        await run_publisher(publisher, asyncio.Event(), run_once=True)

        publisher.run_once.assert_called_once()
        publisher.run_forever.assert_not_called()
        publisher.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_run_publisher_continuous(self):
        """Test continuous mode hands the shutdown event to the publisher."""
        publisher = AsyncMock()
        shutdown_event = asyncio.Event()

        await run_publisher(publisher, shutdown_event)

        publisher.run_forever.assert_called_once_with(shutdown_event)
        publisher.close.assert_called_once()

    @pytest.mark.asyncio
    async def test_run_publisher_closes_on_error(self):
        publisher = AsyncMock()
        publisher.run_forever = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(RuntimeError):
            await run_publisher(publisher, asyncio.Event())

        publisher.close.assert_called_once()


class TestRunSubscriber:
    @pytest.mark.asyncio
    async def test_run_subscriber(self):
        subscriber = MagicMock()
        subscriber.run_forever = AsyncMock()
        shutdown_event = asyncio.Event()

        await run_subscriber(subscriber, shutdown_event)

        subscriber.run_forever.assert_called_once_with(shutdown_event)


class TestPublishOnce:
    @pytest.mark.asyncio
    async def test_publish_once_returns_report_json(self, london_payload: dict):
        """Test the manual trigger returns the published report."""
        from weather_relay.schemas import WeatherReport

        report = WeatherReport.model_validate(london_payload)
        publisher = MagicMock()
        publisher.fetch_and_publish = AsyncMock(return_value=report)
        publisher.close = AsyncMock()

        with patch("weather_relay.main.build_publisher", return_value=publisher):
            result = await publish_once(Settings(), "London")

        publisher.fetch_and_publish.assert_called_once_with("London")
        publisher.close.assert_called_once()
        assert WeatherReport.from_json(result) == report

    @pytest.mark.asyncio
    async def test_publish_once_raw(self):
        publisher = MagicMock()
        publisher.fetch_and_publish_raw = AsyncMock(return_value='{"name": "London"}')
        publisher.close = AsyncMock()

        with patch("weather_relay.main.build_publisher", return_value=publisher):
            result = await publish_once(Settings(), "London", raw=True)

        assert result == '{"name": "London"}'

    @pytest.mark.asyncio
    async def test_publish_once_closes_on_failure(self):
        publisher = MagicMock()
        publisher.fetch_and_publish = AsyncMock(side_effect=UpstreamFetchError("London", "down"))
        publisher.close = AsyncMock()

        with patch("weather_relay.main.build_publisher", return_value=publisher):
            with pytest.raises(UpstreamFetchError):
                await publish_once(Settings(), "London")

        publisher.close.assert_called_once()


class TestMain:
    def test_publish_failure_exit_code(self):
        """Test a failed manual publish exits non-zero."""
        with patch(
            "weather_relay.main.publish_once",
            new=AsyncMock(side_effect=UpstreamFetchError("London", "down")),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["publish", "--city", "London"])

        assert exc_info.value.code == 1

    def test_create_topic(self):
        with patch("weather_relay.main.ensure_weather_topic") as ensure:
            with pytest.raises(SystemExit) as exc_info:
                main(["create-topic"])

        ensure.assert_called_once()
        assert exc_info.value.code == 0

    def test_create_topic_broker_failure(self):
        """Test a broker error during topic creation exits non-zero without a traceback."""
        with patch(
            "weather_relay.main.ensure_weather_topic",
            side_effect=KafkaException(KafkaError(KafkaError._TRANSPORT)),
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["create-topic"])

        assert exc_info.value.code == 1

    def test_produce_once(self):
        """Test produce --once runs only the publisher."""
        with patch("weather_relay.main.run_service", new=AsyncMock()) as run_service:
            with pytest.raises(SystemExit):
                main(["produce", "--once", "--city", "Paris"])

        kwargs = run_service.call_args.kwargs
        assert kwargs["produce"] is True
        assert kwargs["consume"] is False
        assert kwargs["run_once"] is True
        assert kwargs["settings"].weather.default_city == "Paris"
