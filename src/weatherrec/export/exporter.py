"""Export the stored record collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from weatherrec.export.formats import ExportFormat
from weatherrec.export.render import render
from weatherrec.records.store import RecordStore

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    """A rendered export ready to be written or sent."""

    content: str
    format: ExportFormat

    @property
    def media_type(self) -> str:
        return self.format.media_type

    @property
    def filename(self) -> str:
        return self.format.filename


class Exporter:
    """Read-only renderer over a record store."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def export(self, fmt: ExportFormat | str) -> ExportResult:
        """Render the current collection.

        Args:
            fmt: Target format (enum member, name or file extension)

        Returns:
            Rendered document with its format

        Raises:
            ValidationError: If the format is not supported
            NoDataError: If CSV is requested and there are no records
            CorruptStoreError: If the store cannot be read
        """
        export_format = ExportFormat.parse(fmt)
        records = self.store.load().weather_records
        content = render(records, export_format)
        logger.info("Exported %d records as %s", len(records), export_format.value)
        return ExportResult(content=content, format=export_format)
