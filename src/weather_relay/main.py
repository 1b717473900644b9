"""Main entry point for running the weather publisher and subscriber."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import NoReturn

from confluent_kafka import KafkaException

from . import __version__
from .config import Settings, get_settings
from .consumers import WeatherSubscriber
from .errors import WeatherRelayError
from .factory import build_publisher, build_subscriber
from .producers import WeatherPublisher
from .topics import ensure_weather_topic

logger = logging.getLogger(__name__)

_shutdown_event: asyncio.Event | None = None


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Reduce noise from httpx
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def handle_shutdown(signum: int, frame: object) -> None:
    """Handle shutdown signals gracefully."""
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, initiating shutdown...", sig_name)
    if _shutdown_event:
        _shutdown_event.set()


def _install_shutdown_event() -> asyncio.Event:
    global _shutdown_event
    _shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, lambda s=sig: handle_shutdown(s, None))
    return _shutdown_event


def with_default_city(settings: Settings, city: str | None) -> Settings:
    """Return settings with the scheduled city replaced, if one is given."""
    if not city:
        return settings
    weather = settings.weather.model_copy(update={"default_city": city})
    return settings.model_copy(update={"weather": weather})


async def run_publisher(
    publisher: WeatherPublisher,
    shutdown_event: asyncio.Event,
    run_once: bool = False,
) -> None:
    """Run the publisher until shutdown.

    Args:
        publisher: The publisher to run.
        shutdown_event: Event to signal shutdown.
        run_once: If True, fetch once and exit instead of polling.
    """
    try:
        if run_once:
            logger.info("Running weather publisher once")
            await publisher.run_once()
        else:
            await publisher.run_forever(shutdown_event)
    finally:
        logger.info("Shutting down weather publisher")
        await publisher.close()


async def run_subscriber(subscriber: WeatherSubscriber, shutdown_event: asyncio.Event) -> None:
    """Run the subscriber until shutdown."""
    logger.info("Starting weather subscriber on topic '%s'", subscriber.topic)
    try:
        await subscriber.run_forever(shutdown_event)
    finally:
        logger.info("Weather subscriber stopped")


async def run_service(
    settings: Settings,
    produce: bool = True,
    consume: bool = True,
    run_once: bool = False,
) -> None:
    """Run publisher and/or subscriber concurrently until shutdown.

    Args:
        settings: Application settings.
        produce: Run the scheduled publisher.
        consume: Run the subscriber.
        run_once: Publish once and exit. Ignored for the subscriber.
    """
    shutdown_event = _install_shutdown_event()
    tasks: list[asyncio.Task] = []

    if produce:
        tasks.append(
            asyncio.create_task(
                run_publisher(build_publisher(settings), shutdown_event, run_once),
                name="publisher",
            )
        )

    if consume and not run_once:
        tasks.append(
            asyncio.create_task(
                run_subscriber(build_subscriber(settings), shutdown_event),
                name="subscriber",
            )
        )

    if not tasks:
        logger.warning("Nothing to run")
        return

    try:
        await asyncio.gather(*tasks)
    except asyncio.CancelledError:
        logger.info("Service cancelled")
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

    logger.info("All components stopped")


async def publish_once(settings: Settings, city: str, raw: bool = False) -> str:
    """Fetch weather for a city, publish it, and return the published JSON.

    Args:
        settings: Application settings.
        city: City to fetch.
        raw: Publish the upstream body unchanged instead of the parsed report.

    Returns:
        The JSON message value that was published.
    """
    publisher = build_publisher(settings)
    try:
        if raw:
            return await publisher.fetch_and_publish_raw(city)
        report = await publisher.fetch_and_publish(city)
        return report.to_json()
    finally:
        await publisher.close()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="weather-relay",
        description="Weather Relay - OpenWeather to Kafka publisher and subscriber",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Publish London weather every 30 seconds and log it back from the topic
  weather-relay run

  # Publish only, once, for another city
  weather-relay produce --once --city Paris

  # Fetch and publish one report, print it
  weather-relay publish --city Berlin

Environment Variables:
  KAFKA_BOOTSTRAP_SERVERS        Kafka broker addresses (default: localhost:9092)
  KAFKA_WEATHER_TOPIC            Topic name (default: weather)
  OPENWEATHER_API_KEY            OpenWeather API key
  WEATHER_DEFAULT_CITY           City for scheduled fetches (default: London)
  WEATHER_FETCH_INTERVAL_SECONDS Seconds between fetches (default: 30)
        """,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run publisher and subscriber together")
    run_parser.add_argument("--city", help="City for scheduled fetches")

    produce_parser = subparsers.add_parser("produce", help="Run the scheduled publisher")
    produce_parser.add_argument("--city", help="City for scheduled fetches")
    produce_parser.add_argument(
        "--once",
        action="store_true",
        help="Fetch and publish once, then exit",
    )

    subparsers.add_parser("consume", help="Run the subscriber")

    publish_parser = subparsers.add_parser("publish", help="Fetch and publish one report")
    publish_parser.add_argument("--city", required=True, help="City to fetch")
    publish_parser.add_argument(
        "--raw",
        action="store_true",
        help="Publish the upstream response body unchanged",
    )

    subparsers.add_parser("create-topic", help="Create the weather topic if missing")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> NoReturn:
    """Main entry point."""
    args = parse_args(argv)

    setup_logging(args.log_level)

    settings = with_default_city(get_settings(), getattr(args, "city", None))

    logger.info("Weather Relay starting")
    logger.info("Kafka bootstrap servers: %s", settings.kafka.bootstrap_servers)

    exit_code = 0
    try:
        if args.command == "create-topic":
            ensure_weather_topic(settings.kafka)
        elif args.command == "publish":
            print(asyncio.run(publish_once(settings, args.city, raw=args.raw)))
        else:
            asyncio.run(
                run_service(
                    settings=settings,
                    produce=args.command in ("run", "produce"),
                    consume=args.command in ("run", "consume"),
                    run_once=getattr(args, "once", False),
                )
            )
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except WeatherRelayError as e:
        logger.error("%s failed: %s", args.command, e)
        exit_code = 1
    except KafkaException as e:
        logger.error("%s failed: %s", args.command, e)
        exit_code = 1

    logger.info("Shutdown complete")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
