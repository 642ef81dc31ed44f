"""Weather package - holds the API client, mock data, models and custom errors."""

from .api import WeatherAPI
from .errors import (
    AuthenticationError,
    LocationNotFoundError,
    LocationRequiredError,
    ParseError,
    WeatherAPIError,
)
from .mock import MockWeather
from .models import CurrentWeather, Forecast, GeocodeResult, WeatherCondition

# Define what gets imported with: from weatherrec.weather import *
__all__ = [
    "AuthenticationError",
    "CurrentWeather",
    "Forecast",
    "GeocodeResult",
    "LocationNotFoundError",
    "LocationRequiredError",
    "MockWeather",
    "ParseError",
    "WeatherAPI",
    "WeatherAPIError",
    "WeatherCondition",
]
