"""Pure renderers turning a record sequence into export text.

Each renderer is a total function of its input: the same records in the
same order always produce the same text.
"""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Callable, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Final

from jinja2 import Environment, FileSystemLoader, select_autoescape

from weatherrec.export.formats import ExportFormat
from weatherrec.records.errors import NoDataError
from weatherrec.records.models import WeatherRecord
from weatherrec.utils.formatting import format_scalar, format_temperature

TEMPLATES_DIR: Final = Path(__file__).parent / "templates"

# Scalar fields, in document order; weatherData is deliberately left out
SCALAR_FIELDS: Final = (
    "id",
    "location",
    "startDate",
    "endDate",
    "temperature",
    "createdAt",
    "updatedAt",
)

Renderer = Callable[[Sequence[WeatherRecord]], str]


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(["xml", "xml.j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )
    env.filters.update(
        {
            "scalar": format_scalar,
            "temperature": format_temperature,
        }
    )
    return env


def scalar_fields(record: WeatherRecord) -> list[tuple[str, str]]:
    """Return ``(wire name, text)`` pairs for a record's scalar fields."""
    data = record.to_dict()
    return [(name, format_scalar(data[name])) for name in SCALAR_FIELDS]


def to_json(records: Sequence[WeatherRecord]) -> str:
    """Render records as a pretty-printed JSON array."""
    return json.dumps([r.to_dict() for r in records], indent=2)


def to_csv(records: Sequence[WeatherRecord]) -> str:
    """Render records as CSV, quoting every data value.

    Raises:
        NoDataError: If there are no records to export
    """
    if not records:
        raise NoDataError()

    buf = io.StringIO()
    buf.write(",".join(SCALAR_FIELDS) + "\n")
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow([text for _, text in scalar_fields(record)])
    return buf.getvalue()


def to_xml(records: Sequence[WeatherRecord]) -> str:
    """Render records as an XML document with escaped values."""
    template = _environment().get_template("records.xml.j2")
    return template.render(records=[scalar_fields(r) for r in records])


def to_markdown(records: Sequence[WeatherRecord]) -> str:
    """Render records as a Markdown report, one section per record."""
    template = _environment().get_template("records.md.j2")
    return template.render(records=records)


RENDERERS: Final[dict[ExportFormat, Renderer]] = {
    ExportFormat.JSON: to_json,
    ExportFormat.CSV: to_csv,
    ExportFormat.XML: to_xml,
    ExportFormat.MARKDOWN: to_markdown,
}


def render(records: Sequence[WeatherRecord], fmt: ExportFormat | str) -> str:
    """Render records in the requested format."""
    return RENDERERS[ExportFormat.parse(fmt)](records)
