import json
import random
from typing import Any
from unittest.mock import Mock, patch

import pytest
import requests

from weatherrec.settings import UserSettings
from weatherrec.weather import (
    AuthenticationError,
    LocationNotFoundError,
    LocationRequiredError,
    MockWeather,
    ParseError,
    WeatherAPI,
    WeatherAPIError,
)
from weatherrec.weather.errors import NotFoundError

CURRENT: dict[str, Any] = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    "main": {"temp": 14.2, "feels_like": 13.6, "pressure": 1012, "humidity": 72},
    "visibility": 10000,
    "wind": {"speed": 4.1, "deg": 240},
    "dt": 1717243200,
    "sys": {"country": "GB", "sunrise": 1717213500, "sunset": 1717272900},
    "timezone": 3600,
    "name": "London",
}


def ok_response(payload: Any) -> Mock:
    resp = Mock()
    resp.status_code = 200
    resp.text = json.dumps(payload)
    resp.json.return_value = payload
    return resp


def error_response(status: int, payload: Any) -> Mock:
    resp = Mock()
    resp.status_code = status
    resp.text = json.dumps(payload)
    resp.json.return_value = payload
    return resp


@pytest.fixture
def api(live_settings: UserSettings) -> WeatherAPI:
    return WeatherAPI(live_settings, mock=MockWeather(random.Random(7)))


@pytest.fixture
def demo_api(demo_settings: UserSettings) -> WeatherAPI:
    return WeatherAPI(demo_settings, mock=MockWeather(random.Random(7)))


def test_demo_mode_never_calls_network(demo_api: WeatherAPI) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        current = demo_api.current("Paris, FR")
        forecast = demo_api.forecast(lat=48.85, lon=2.35)
        places = demo_api.geocode("Paris")

    mock_get.assert_not_called()
    assert demo_api.live is False
    assert current["name"] == "Paris"
    assert forecast["city"]["coord"] == {"lat": 48.85, "lon": 2.35}
    assert places[0]["name"] == "Paris"


@pytest.mark.parametrize("key", ["demo_key", "your_api_key_here"])
def test_placeholder_keys_mean_demo_mode(key: str) -> None:
    assert WeatherAPI(UserSettings(api_key=key)).live is False


def test_lookup_requires_location_or_coordinates(demo_api: WeatherAPI) -> None:
    with pytest.raises(LocationRequiredError) as excinfo:
        demo_api.current()
    assert excinfo.value.code == 400
    with pytest.raises(LocationRequiredError):
        demo_api.forecast(lat=10.0)
    with pytest.raises(LocationRequiredError):
        demo_api.geocode("  ")
    with pytest.raises(LocationRequiredError):
        demo_api.reverse_geocode(None, 2.0)


def test_current_by_name(api: WeatherAPI) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response(CURRENT)
        result = api.current("London")

    assert result == CURRENT
    url = mock_get.call_args.args[0]
    params = mock_get.call_args.kwargs["params"]
    assert url.endswith("/data/2.5/weather")
    assert params == {"q": "London", "units": "metric", "appid": "fake-api-key-123"}
    assert mock_get.call_args.kwargs["timeout"] == 10.0


def test_coordinates_take_precedence(api: WeatherAPI) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response(CURRENT)
        api.current("Ignored", lat=51.5, lon=-0.12, units="imperial")

    params = mock_get.call_args.kwargs["params"]
    assert "q" not in params
    assert (params["lat"], params["lon"], params["units"]) == (51.5, -0.12, "imperial")


def test_forecast_keeps_list_key(api: WeatherAPI) -> None:
    payload = {
        "city": {"name": "London", "country": "GB", "coord": {"lat": 51.5, "lon": -0.12}},
        "list": [
            {
                "dt": 1717243200,
                "main": {"temp": 14.0},
                "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
                "pop": 0.1,
                "dt_txt": "2024-06-01 12:00:00",
            }
        ],
    }
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response(payload)
        result = api.forecast("London")

    assert result == payload


@pytest.mark.parametrize(
    "status, expected_type",
    [(401, AuthenticationError), (404, NotFoundError), (500, WeatherAPIError)],
)
def test_error_status_raises(
    api: WeatherAPI, status: int, expected_type: type[WeatherAPIError]
) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = error_response(status, {"cod": str(status), "message": "city not found"})
        with pytest.raises(expected_type) as excinfo:
            api.current("Atlantis")

    assert excinfo.value.code == status
    assert "city not found" in str(excinfo.value)


def test_error_without_json_body_uses_known_message(api: WeatherAPI) -> None:
    resp = Mock()
    resp.status_code = 429
    resp.text = "Too Many Requests"
    resp.json.side_effect = ValueError("no json")
    with patch("weatherrec.weather.api.requests.get", return_value=resp):
        with pytest.raises(WeatherAPIError) as excinfo:
            api.current("London")

    assert excinfo.value.message == "Rate limit exceeded"


def test_network_failure_falls_back_to_mock(api: WeatherAPI) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.side_effect = requests.ConnectionError("offline")
        result = api.current("London, UK")

    assert result["name"] == "London"
    assert 15 <= result["main"]["temp"] <= 30


def test_malformed_payload_raises_parse_error(api: WeatherAPI) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response({"name": "London"})
        with pytest.raises(ParseError):
            api.current("London")


def test_invalid_json_raises_parse_error(api: WeatherAPI) -> None:
    resp = Mock()
    resp.status_code = 200
    resp.json.side_effect = ValueError("Expecting value")
    with patch("weatherrec.weather.api.requests.get", return_value=resp):
        with pytest.raises(ParseError):
            api.current("London")


def test_geocode_expects_list(api: WeatherAPI) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response({"name": "London"})
        with pytest.raises(ParseError):
            api.geocode("London")


def test_reverse_geocode(api: WeatherAPI) -> None:
    place = {"name": "Westminster", "lat": 51.5, "lon": -0.12, "country": "GB"}
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response([place])
        result = api.reverse_geocode(51.5, -0.12)

    assert result == [place]
    assert mock_get.call_args.kwargs["params"]["limit"] == 1


def test_map_data_with_coordinates(demo_api: WeatherAPI) -> None:
    result = demo_api.map_data(lat=48.85, lon=2.35)
    assert result == {
        "location": "Unknown",
        "coordinates": {"lat": 48.85, "lon": 2.35},
        "mapUrl": "https://www.google.com/maps?q=48.85,2.35",
    }


def test_map_data_geocodes_location(api: WeatherAPI) -> None:
    place = {"name": "Paris", "lat": 48.8566, "lon": 2.3522, "country": "FR"}
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response([place])
        result = api.map_data("paris")

    assert result["location"] == "Paris"
    assert result["mapUrl"] == "https://www.google.com/maps?q=48.8566,2.3522"


def test_map_data_unknown_location(api: WeatherAPI) -> None:
    with patch("weatherrec.weather.api.requests.get") as mock_get:
        mock_get.return_value = ok_response([])
        with pytest.raises(LocationNotFoundError) as excinfo:
            api.map_data("Nowhere")
    assert excinfo.value.code == 404


def test_map_data_requires_something(demo_api: WeatherAPI) -> None:
    with pytest.raises(LocationRequiredError):
        demo_api.map_data()
