"""OpenWeather API client for current weather data."""

import logging

import httpx

from ..config import OpenWeatherConfig
from ..errors import UpstreamFetchError
from ..schemas import WeatherReport

logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """HTTP client for fetching current weather from the OpenWeather API.

    Each call issues exactly one GET request. There is no retry: a failed
    request surfaces as UpstreamFetchError and the caller decides what to do.
    """

    def __init__(
        self,
        config: OpenWeatherConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize OpenWeather client.

        Args:
            config: OpenWeather configuration settings.
            http_client: Optional custom HTTP client for testing.
        """
        self.config = config or OpenWeatherConfig()
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                follow_redirects=True,
            )
        return self._http_client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    def _params(self, location: str) -> dict[str, str]:
        return {
            "q": location,
            "appid": self.config.api_key,
            "units": self.config.units,
        }

    async def _get(self, location: str) -> httpx.Response:
        """GET the current weather document for a location.

        Raises:
            UpstreamFetchError: On network failure or non-2xx status.
        """
        try:
            response = await self.http_client.get(self.config.base_url, params=self._params(location))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Weather API returned HTTP %d for %s",
                e.response.status_code,
                location,
            )
            raise UpstreamFetchError(
                location,
                f"Weather API returned HTTP {e.response.status_code} for {location}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            logger.error("Failed to fetch weather data for %s: %s", location, e)
            raise UpstreamFetchError(location, f"Failed to fetch weather data for {location}: {e}") from e
        return response

    async def get_current_weather(self, location: str) -> WeatherReport:
        """Fetch and parse current weather for a location.

        Args:
            location: City name passed as the `q` query parameter.

        Returns:
            Parsed WeatherReport.

        Raises:
            UpstreamFetchError: If the request fails.
            SerializationError: If the body is not a valid weather document.
        """
        response = await self._get(location)
        report = WeatherReport.from_json(response.content)
        logger.debug("Fetched weather for %s: %s", location, report)
        return report

    async def get_current_weather_raw(self, location: str) -> str:
        """Fetch current weather for a location as the unparsed response body.

        Args:
            location: City name passed as the `q` query parameter.

        Returns:
            Response body text.
        """
        response = await self._get(location)
        return response.text
