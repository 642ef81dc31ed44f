"""Export package - renders stored records as JSON, CSV, XML or Markdown."""

from .exporter import Exporter, ExportResult
from .formats import ExportFormat
from .render import render, to_csv, to_json, to_markdown, to_xml

__all__ = [
    "ExportFormat",
    "ExportResult",
    "Exporter",
    "render",
    "to_csv",
    "to_json",
    "to_markdown",
    "to_xml",
]
