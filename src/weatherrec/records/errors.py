"""Exception classes for the weather record store and exporters.

This module defines the error taxonomy surfaced by the record service,
the record store and the exporters. Each error carries an HTTP-style
status code so the web layer can map it to a response without knowing
about individual error types.
"""

from __future__ import annotations

from typing import Optional


class RecordError(Exception):
    """Base class for record store, service and export failures.

    Attributes:
        code: HTTP status code that best describes the failure
        message: Human-readable error message
    """

    default_code: int = 500

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            code: HTTP status code (defaults to the class default)
        """
        super().__init__(message)
        self.code: int = code if code is not None else self.default_code
        self.message: str = message

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client-side error (4xx).

        Returns:
            True for 400-499 status codes
        """
        return 400 <= self.code < 500


class ValidationError(RecordError):
    """Raised for missing or malformed input, or an inverted date range."""

    default_code = 400


class NotFoundError(RecordError):
    """Raised when no record has the requested id."""

    default_code = 404

    def __init__(self, record_id: str) -> None:
        super().__init__("Record not found")
        self.record_id = record_id


class NoDataError(RecordError):
    """Raised when exporting CSV from an empty collection."""

    default_code = 404

    def __init__(self, message: str = "No records to export") -> None:
        super().__init__(message)


class CorruptStoreError(RecordError):
    """Raised when the backing document cannot be read or parsed."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the problem
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.original_error = original_error


class StoreWriteError(RecordError):
    """Raised when the backing document cannot be written."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with I/O error details.

        Args:
            message: Description of the write failure
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.original_error = original_error
