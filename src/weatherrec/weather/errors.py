"""Errors raised by weather lookups.

Every error carries a numeric ``code``: the upstream HTTP status for error
responses from OpenWeatherMap, the status to report for lookups we refuse
ourselves, and 0 for payloads we could not make sense of.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class WeatherAPIError(Exception):
    """A weather lookup failed.

    Includes the decoded error body from OpenWeatherMap when there was one.
    """

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code, or 0 when there is none
            message: Human-readable error message
            response: Decoded error body, if any
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response

    @property
    def is_client_error(self) -> bool:
        """True when the request itself was at fault (4xx)."""
        return 400 <= self.code < 500

    @property
    def http_status(self) -> int:
        """Status code to report to our own clients.

        Returns:
            The code when it is an HTTP error status, otherwise 502
        """
        return self.code if 400 <= self.code < 600 else 502

    @classmethod
    def from_response(cls, response: Dict[str, Any], status_code: int) -> WeatherAPIError:
        """Build the error matching an OpenWeatherMap error response.

        Args:
            response: Decoded error body (``message`` is used when present)
            status_code: HTTP status of the response

        Returns:
            Appropriate WeatherAPIError subclass
        """
        message = response.get("message") or f"HTTP {status_code}"
        error_cls = _STATUS_ERRORS.get(status_code)
        if error_cls is None:
            error_cls = ServerError if status_code >= 500 else cls
        return error_cls(status_code, message, response)


class AuthenticationError(WeatherAPIError):
    """The API key was rejected (401/403)."""


class NotFoundError(WeatherAPIError):
    """OpenWeatherMap knows nothing about the location (404)."""


class RateLimitError(WeatherAPIError):
    """The API key's call quota is exhausted (429)."""


class ServerError(WeatherAPIError):
    """OpenWeatherMap failed on its side (5xx)."""


class ParseError(WeatherAPIError):
    """A response could not be decoded or did not match its model."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class LocationRequiredError(WeatherAPIError):
    """A lookup has neither a location name nor coordinates."""

    def __init__(self, message: str = "Location or coordinates required") -> None:
        super().__init__(400, message)


class LocationNotFoundError(WeatherAPIError):
    """Geocoding a location returned no matches."""

    def __init__(self, location: str) -> None:
        super().__init__(404, "Location not found")
        self.location = location


_STATUS_ERRORS: Dict[int, type[WeatherAPIError]] = {
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    429: RateLimitError,
}
