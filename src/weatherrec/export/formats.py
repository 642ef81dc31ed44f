"""Supported export formats."""

from __future__ import annotations

from enum import Enum

from weatherrec.records.errors import ValidationError


class ExportFormat(str, Enum):
    """Text formats the record collection can be exported to."""

    JSON = "json"
    CSV = "csv"
    XML = "xml"
    MARKDOWN = "markdown"

    @property
    def media_type(self) -> str:
        """HTTP content type for the rendered document."""
        return {
            ExportFormat.JSON: "application/json",
            ExportFormat.CSV: "text/csv",
            ExportFormat.XML: "application/xml",
            ExportFormat.MARKDOWN: "text/markdown",
        }[self]

    @property
    def extension(self) -> str:
        """File extension used for downloads."""
        return "md" if self is ExportFormat.MARKDOWN else self.value

    @property
    def filename(self) -> str:
        """Suggested download filename."""
        return f"weather-data.{self.extension}"

    @classmethod
    def parse(cls, value: str | ExportFormat) -> ExportFormat:
        """Look up a format by name or file extension.

        Raises:
            ValidationError: If the format is not supported
        """
        if isinstance(value, ExportFormat):
            return value
        name = value.strip().lower()
        for fmt in cls:
            if name in (fmt.value, fmt.extension):
                return fmt
        supported = ", ".join(f.value for f in cls)
        raise ValidationError(f"Unsupported export format: {value} (expected one of {supported})")
