"""HTTP clients for weather data sources."""

from .openweather import OpenWeatherClient

__all__ = ["OpenWeatherClient"]
