"""Error types raised along the fetch, publish and consume path."""


class WeatherRelayError(Exception):
    """Base class for weather relay failures."""


class UpstreamFetchError(WeatherRelayError):
    """Weather API request failed (network error or non-2xx response)."""

    def __init__(self, location: str, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.location = location
        self.status_code = status_code


class SerializationError(WeatherRelayError):
    """Payload could not be converted to or from a WeatherReport."""

    def __init__(self, message: str, payload: str | bytes | None = None) -> None:
        super().__init__(message)
        self.payload = payload


class PublishError(WeatherRelayError):
    """Kafka producer rejected a message."""

    def __init__(self, topic: str, key: str | None, message: str) -> None:
        super().__init__(message)
        self.topic = topic
        self.key = key
