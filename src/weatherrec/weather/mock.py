"""Mock weather data for demo mode and network fallbacks.

Values are random but plausible: temperatures between 15 and 30 °C, a
handful of common sky conditions, and a 5-day forecast in 3-hour steps.
"""

from __future__ import annotations

import random
import time
from datetime import UTC, datetime
from typing import Any, Final

DEFAULT_CITY: Final = "Demo City"
DEFAULT_LAT: Final = 40.7128
DEFAULT_LON: Final = -74.0060
FORECAST_STEPS: Final = 40
STEP_SECONDS: Final = 3 * 3600

CONDITIONS: Final = (
    {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"},
    {"id": 802, "main": "Clouds", "description": "scattered clouds", "icon": "03d"},
    {"id": 500, "main": "Rain", "description": "light rain", "icon": "10d"},
    {"id": 801, "main": "Clouds", "description": "few clouds", "icon": "02d"},
)


def _city_name(location: str | None) -> str:
    return (location or DEFAULT_CITY).split(",")[0].strip()


def _coord(lat: float | None, lon: float | None) -> dict[str, float]:
    return {
        "lat": DEFAULT_LAT if lat is None else lat,
        "lon": DEFAULT_LON if lon is None else lon,
    }


class MockWeather:
    """Generator for OpenWeatherMap-shaped mock payloads."""

    def __init__(self, rng: random.Random | None = None) -> None:
        """Initialize the generator.

        Args:
            rng: Random source (seed one for reproducible output)
        """
        self.rng = rng or random.Random()

    def _readings(self, spread: float) -> dict[str, Any]:
        base = 15 + self.rng.random() * 15
        return {
            "temp": round(base, 1),
            "feels_like": round(base + self.rng.random() * 4 - 2, 1),
            "temp_min": round(base - spread, 1),
            "temp_max": round(base + spread, 1),
            "pressure": 1000 + self.rng.randrange(30),
            "humidity": 40 + self.rng.randrange(50),
        }

    def _wind(self) -> dict[str, Any]:
        return {"speed": round(self.rng.random() * 10, 1), "deg": self.rng.randrange(360)}

    def current(
        self,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> dict[str, Any]:
        """Current conditions payload."""
        now = int(time.time())
        return {
            "coord": _coord(lat, lon),
            "weather": [dict(self.rng.choice(CONDITIONS))],
            "main": self._readings(spread=5),
            "visibility": 10000,
            "wind": self._wind(),
            "clouds": {"all": self.rng.randrange(100)},
            "dt": now,
            "sys": {"country": "US", "sunrise": now - 21600, "sunset": now + 21600},
            "timezone": -18000,
            "name": _city_name(location),
        }

    def forecast(
        self,
        location: str | None = None,
        lat: float | None = None,
        lon: float | None = None,
    ) -> dict[str, Any]:
        """Five-day forecast payload."""
        now = int(time.time())
        items = []
        for i in range(FORECAST_STEPS):
            dt = now + i * STEP_SECONDS
            items.append(
                {
                    "dt": dt,
                    "main": self._readings(spread=3),
                    "weather": [dict(self.rng.choice(CONDITIONS))],
                    "clouds": {"all": self.rng.randrange(100)},
                    "wind": self._wind(),
                    "visibility": 10000,
                    "pop": self.rng.random(),
                    "dt_txt": datetime.fromtimestamp(dt, tz=UTC).strftime("%Y-%m-%d %H:%M:%S"),
                }
            )
        return {
            "city": {
                "name": _city_name(location),
                "country": "US",
                "coord": _coord(lat, lon),
            },
            "list": items,
        }

    def geocode(self, location: str) -> list[dict[str, Any]]:
        """Single fake match near the default coordinates."""
        return [
            {
                "name": _city_name(location),
                "lat": DEFAULT_LAT + (self.rng.random() - 0.5) * 10,
                "lon": DEFAULT_LON + (self.rng.random() - 0.5) * 10,
                "country": "US",
                "state": "Demo State",
            }
        ]

    def reverse_geocode(self, lat: float, lon: float) -> list[dict[str, Any]]:
        """Single fake place at the given coordinates."""
        return [
            {
                "name": DEFAULT_CITY,
                "lat": lat,
                "lon": lon,
                "country": "US",
                "state": "Demo State",
            }
        ]
