"""Typed models for OpenWeatherMap 2.5 current, forecast and geocoding responses.

Only the fields the application relies on are modelled; everything else is
kept as extra data so responses pass through unchanged.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ─────────────────────────── primitives ──────────────────────────────────────


class OwmModel(BaseModel):
    """Base model that keeps unknown fields."""

    model_config = ConfigDict(extra="allow")


class Coord(OwmModel):
    """Geographic coordinates (latitude, longitude)."""

    lat: float
    lon: float


class WeatherCondition(OwmModel):
    """Weather condition information from OpenWeatherMap."""

    id: int
    main: str
    description: str
    icon: str


class MainReadings(OwmModel):
    """Temperature, pressure and humidity block."""

    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: int | None = None
    humidity: int | None = None


class Wind(OwmModel):
    speed: float = 0.0
    deg: int | None = None


# ─────────────────────────── responses ───────────────────────────────────────


class CurrentWeather(OwmModel):
    """Current conditions for one location."""

    coord: Coord
    weather: list[WeatherCondition]
    main: MainReadings
    wind: Wind | None = None
    dt: int
    timezone: int | None = None
    name: str = ""

    @property
    def weather_main(self) -> WeatherCondition | None:
        """Get the primary weather condition.

        Returns:
            First weather condition in the list or None if not available
        """
        return self.weather[0] if self.weather else None


class ForecastItem(OwmModel):
    """One 3-hour forecast step."""

    dt: int
    main: MainReadings
    weather: list[WeatherCondition]
    pop: float | None = None
    dt_txt: str | None = None


class ForecastCity(OwmModel):
    name: str = ""
    country: str | None = None
    coord: Coord | None = None


class Forecast(OwmModel):
    """Five-day forecast in 3-hour steps."""

    city: ForecastCity
    items: list[ForecastItem] = Field(alias="list")


class GeocodeResult(OwmModel):
    """A place returned by direct or reverse geocoding."""

    name: str
    lat: float
    lon: float
    country: str | None = None
    state: str | None = None
