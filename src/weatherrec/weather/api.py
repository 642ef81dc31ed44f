"""Weather API client for OpenWeatherMap."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Final, TypeVar

import requests
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from weatherrec.settings import UserSettings

from .errors import (
    LocationNotFoundError,
    LocationRequiredError,
    ParseError,
    WeatherAPIError,
)
from .mock import MockWeather
from .models import CurrentWeather, Forecast, GeocodeResult

logger: Final = logging.getLogger(__name__)

# API endpoints
WEATHER_BASE_URL: Final = "https://api.openweathermap.org/data/2.5"
GEO_BASE_URL: Final = "https://api.openweathermap.org/geo/1.0"
MAPS_URL: Final = "https://www.google.com/maps?q={lat},{lon}"

# Human‑readable explanations for common HTTP errors
HTTP_ERROR_MAP: Final = {
    400: "Bad request - check location or parameters",
    401: "Invalid or missing API key",
    403: "Account blocked / key revoked",
    404: "Location returned no data",
    429: "Rate limit exceeded",
    500: "OpenWeatherMap internal error",
    502: "Bad gateway at OpenWeatherMap",
    503: "Service unavailable (maintenance)",
    504: "Gateway timeout",
}

M = TypeVar("M", bound=BaseModel)


def _location_params(
    location: str | None, lat: float | None, lon: float | None
) -> dict[str, Any]:
    """Build the query for a lookup; coordinates win over a place name."""
    if lat is not None and lon is not None:
        return {"lat": lat, "lon": lon}
    if location and location.strip():
        return {"q": location.strip()}
    raise LocationRequiredError()


class WeatherAPI:
    """OpenWeatherMap client for current conditions, forecasts and geocoding.

    Without a usable API key every call is answered by the mock generator
    (demo mode). With a key, network failures are logged and degrade to mock
    data, while error responses from the API raise ``WeatherAPIError``.
    Responses are validated against typed models and returned as plain
    dicts, so they can be stored as opaque record snapshots.
    """

    def __init__(
        self,
        config: UserSettings,
        timeout: float | None = None,
        mock: MockWeather | None = None,
    ) -> None:
        """Initialize the weather API client.

        Args:
            config: Settings with API key and default units
            timeout: Timeout for API requests in seconds (default: from settings)
            mock: Mock data generator for demo mode and fallbacks
        """
        self.config = config
        self.timeout = timeout if timeout is not None else config.request_timeout
        self.mock = mock or MockWeather()

    @property
    def live(self) -> bool:
        """Whether requests go to OpenWeatherMap."""
        return self.config.has_valid_api_key

    def current(
        self,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
        units: str | None = None,
    ) -> dict[str, Any]:
        """Retrieve current conditions by place name or coordinates.

        Raises:
            LocationRequiredError: Neither location nor coordinates given
            WeatherAPIError: OpenWeatherMap answered with an error status
            ParseError: The response did not match the expected shape
        """
        params = _location_params(location, lat, lon)
        if not self.live:
            logger.debug("Using mock weather data (no API key configured)")
            return self.mock.current(location, lat, lon)

        data = self._get(
            f"{WEATHER_BASE_URL}/weather",
            {**params, "units": units or self.config.units},
            fallback=lambda: self.mock.current(location, lat, lon),
        )
        return self._validate(CurrentWeather, data)

    def forecast(
        self,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
        units: str | None = None,
    ) -> dict[str, Any]:
        """Retrieve the 5-day / 3-hour forecast by place name or coordinates.

        Raises:
            LocationRequiredError: Neither location nor coordinates given
            WeatherAPIError: OpenWeatherMap answered with an error status
            ParseError: The response did not match the expected shape
        """
        params = _location_params(location, lat, lon)
        if not self.live:
            logger.debug("Using mock forecast data (no API key configured)")
            return self.mock.forecast(location, lat, lon)

        data = self._get(
            f"{WEATHER_BASE_URL}/forecast",
            {**params, "units": units or self.config.units},
            fallback=lambda: self.mock.forecast(location, lat, lon),
        )
        return self._validate(Forecast, data)

    def geocode(self, location: str | None, limit: int = 5) -> list[dict[str, Any]]:
        """Resolve a place name to candidate coordinates."""
        if not location or not location.strip():
            raise LocationRequiredError("Location required")
        if not self.live:
            logger.debug("Using mock geocode data (no API key configured)")
            return self.mock.geocode(location)

        data = self._get(
            f"{GEO_BASE_URL}/direct",
            {"q": location.strip(), "limit": limit},
            fallback=lambda: self.mock.geocode(location),
        )
        return self._validate_list(GeocodeResult, data)

    def reverse_geocode(self, lat: float | None, lon: float | None) -> list[dict[str, Any]]:
        """Resolve coordinates to a place name."""
        if lat is None or lon is None:
            raise LocationRequiredError("Latitude and longitude required")
        if not self.live:
            logger.debug("Using mock reverse geocode data (no API key configured)")
            return self.mock.reverse_geocode(lat, lon)

        data = self._get(
            f"{GEO_BASE_URL}/reverse",
            {"lat": lat, "lon": lon, "limit": 1},
            fallback=lambda: self.mock.reverse_geocode(lat, lon),
        )
        return self._validate_list(GeocodeResult, data)

    def map_data(
        self,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> dict[str, Any]:
        """Coordinates and a Google Maps link for a place.

        Raises:
            LocationRequiredError: Neither location nor coordinates given
            LocationNotFoundError: Geocoding found no match for the location
        """
        if lat is None or lon is None:
            if not location:
                raise LocationRequiredError()
            matches = self.geocode(location, limit=1)
            if not matches:
                raise LocationNotFoundError(location)
            location = matches[0]["name"]
            lat, lon = matches[0]["lat"], matches[0]["lon"]

        return {
            "location": location or "Unknown",
            "coordinates": {"lat": lat, "lon": lon},
            "mapUrl": MAPS_URL.format(lat=lat, lon=lon),
        }

    # Private helper methods
    def _get(
        self,
        url: str,
        params: dict[str, Any],
        fallback: Callable[[], Any],
    ) -> Any:
        """GET an OpenWeatherMap endpoint and decode the JSON body."""
        params = {**params, "appid": self.config.api_key}
        try:
            resp = requests.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("Weather API network error, serving mock data: %s", exc)
            return fallback()

        if resp.status_code != 200:
            try:
                body = resp.json()
            except ValueError:
                body = None
            if not isinstance(body, dict):
                body = {}
            msg = body.get("message") or HTTP_ERROR_MAP.get(resp.status_code, resp.text)
            logger.error("Weather API error: %s - %s", resp.status_code, msg)
            raise WeatherAPIError.from_response({**body, "message": msg}, resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            raise ParseError(f"Weather API returned invalid JSON: {exc}", exc) from exc

    @staticmethod
    def _validate(model: type[M], data: Any) -> dict[str, Any]:
        try:
            parsed = model.model_validate(data)
        except PydanticValidationError as exc:
            raise ParseError(f"Unexpected {model.__name__} payload: {exc}", exc) from exc
        return parsed.model_dump(by_alias=True, exclude_unset=True)

    @classmethod
    def _validate_list(cls, model: type[M], data: Any) -> list[dict[str, Any]]:
        if not isinstance(data, list):
            raise ParseError(f"Expected a list of {model.__name__}, got {type(data).__name__}")
        return [cls._validate(model, item) for item in data]
