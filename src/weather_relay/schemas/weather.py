"""WeatherReport schema for OpenWeather current weather documents."""

from typing import Annotated

from pydantic import BaseModel, Field, ValidationError
from pydantic_core import PydanticSerializationError

from ..errors import SerializationError

# Unknown fields are dropped at every level so new upstream fields never break parsing.
# Non-finite floats are rejected: JSON has no encoding for them.
_MODEL_CONFIG = {"frozen": True, "extra": "ignore", "populate_by_name": True, "allow_inf_nan": False}


class WeatherCondition(BaseModel):
    """One entry of the upstream `weather` array."""

    category: str | None = Field(default=None, alias="main")
    description: str | None = None

    model_config = _MODEL_CONFIG


class MainMetrics(BaseModel):
    """Temperature, humidity and pressure from the upstream `main` object."""

    temp: float | None = None
    humidity: Annotated[int | None, Field(ge=0, le=100)] = None
    pressure: float | None = None

    model_config = _MODEL_CONFIG


class Wind(BaseModel):
    """Wind speed (m/s for metric units) and meteorological direction."""

    speed: float | None = None
    deg: Annotated[int | None, Field(ge=0, le=360)] = None

    model_config = _MODEL_CONFIG


class WeatherReport(BaseModel):
    """One weather observation for one location.

    Uses the upstream field names on the wire, so the same model parses the
    HTTP response body and the Kafka message value.
    Published to the `weather` topic.
    Key format: `{location_name}`
    """

    location_name: Annotated[str, Field(min_length=1, alias="name")]
    main: MainMetrics | None = None
    conditions: tuple[WeatherCondition, ...] = Field(default=(), alias="weather")
    wind: Wind | None = None

    model_config = _MODEL_CONFIG

    @property
    def temperature_c(self) -> float | None:
        return self.main.temp if self.main is not None else None

    @property
    def humidity_pct(self) -> int | None:
        return self.main.humidity if self.main is not None else None

    @property
    def pressure_hpa(self) -> float | None:
        return self.main.pressure if self.main is not None else None

    @property
    def wind_speed(self) -> float | None:
        return self.wind.speed if self.wind is not None else None

    @property
    def wind_direction_deg(self) -> int | None:
        return self.wind.deg if self.wind is not None else None

    @property
    def description(self) -> str | None:
        """Description of the first reported condition, if any."""
        if not self.conditions:
            return None
        return self.conditions[0].description

    def kafka_key(self) -> str:
        """Generate Kafka message key for this report."""
        return self.location_name

    def display_temperature(self) -> str:
        """Temperature formatted for logs, "N/A" when missing."""
        if self.temperature_c is None:
            return "N/A"
        return f"{self.temperature_c:.1f}°C"

    def summary(self) -> str:
        """Human readable one-liner, e.g. "Weather in London: 15.5°C, clear sky, Wind: 3.2 m/s"."""
        wind = f"{self.wind_speed:.1f} m/s" if self.wind_speed is not None else "N/A"
        return (
            f"Weather in {self.location_name}: {self.display_temperature()}, "
            f"{self.description or 'N/A'}, Wind: {wind}"
        )

    def __str__(self) -> str:
        return self.summary()

    def to_json(self) -> str:
        """Serialize to JSON for Kafka using the upstream field names."""
        try:
            return self.model_dump_json(by_alias=True)
        except PydanticSerializationError as e:
            raise SerializationError(f"Failed to serialize report for {self.location_name}: {e}") from e

    @classmethod
    def from_json(cls, payload: str | bytes | None) -> "WeatherReport":
        """Parse an upstream response body or Kafka message value.

        Args:
            payload: JSON document as text or UTF-8 bytes.

        Returns:
            Parsed report.

        Raises:
            SerializationError: If the payload is empty, not JSON, or does
                not match the report shape.
        """
        if not payload:
            raise SerializationError("Empty weather payload", payload)
        try:
            return cls.model_validate_json(payload)
        except ValidationError as e:
            raise SerializationError(f"Invalid weather payload: {e}", payload) from e
