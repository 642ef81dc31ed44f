"""Record stores: wholesale load/save of the record collection."""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Final, Protocol, runtime_checkable

from pydantic import ValidationError as PydanticValidationError

from weatherrec.records.errors import CorruptStoreError, StoreWriteError
from weatherrec.records.models import RecordCollection
from weatherrec.utils.file import atomic_write_text

logger: Final = logging.getLogger(__name__)


@runtime_checkable
class RecordStore(Protocol):
    """Protocol defining the interface for record stores.

    A store reads and writes the entire collection as one unit. It does not
    serialize callers itself; instead it exposes ``lock``, which callers hold
    around every read-modify-write sequence.
    """

    lock: threading.RLock

    def load(self) -> RecordCollection:
        """Load the full collection.

        Returns:
            The persisted collection, empty if nothing was stored yet
        """
        ...

    def save(self, collection: RecordCollection) -> None:
        """Replace the persisted collection.

        Args:
            collection: Collection to persist
        """
        ...


class JsonRecordStore:
    """Record store backed by a single JSON document on disk."""

    def __init__(self, path: Path) -> None:
        """Initialize the store.

        Args:
            path: Location of the backing document
        """
        self.path = Path(path)
        self.lock = threading.RLock()

    def load(self) -> RecordCollection:
        """Load the collection, creating an empty document on first access.

        Returns:
            Parsed collection

        Raises:
            CorruptStoreError: If the document cannot be read or parsed
            StoreWriteError: If the initial empty document cannot be written
        """
        if not self.path.exists():
            collection = RecordCollection()
            logger.info("Initializing record store at %s", self.path)
            self.save(collection)
            return collection

        try:
            raw = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CorruptStoreError(f"Unable to read record store: {exc}", exc) from exc

        try:
            collection = RecordCollection.model_validate_json(raw)
        except PydanticValidationError as exc:
            logger.error("Record store %s is corrupt: %s", self.path, exc)
            raise CorruptStoreError(f"Record store is corrupt: {self.path}", exc) from exc

        logger.debug("Loaded %d records from %s", len(collection), self.path)
        return collection

    def save(self, collection: RecordCollection) -> None:
        """Write the whole collection, replacing the document atomically.

        Args:
            collection: Collection to persist

        Raises:
            StoreWriteError: On any I/O failure
        """
        content = json.dumps(collection.to_dict(), indent=2)
        try:
            atomic_write_text(self.path, content)
        except OSError as exc:
            logger.error("Failed to write record store %s: %s", self.path, exc)
            raise StoreWriteError(f"Failed to write record store: {exc}", exc) from exc
        logger.debug("Saved %d records to %s", len(collection), self.path)


class MemoryRecordStore:
    """In-process record store for tests and demo runs.

    Keeps a serialized copy so callers never share mutable state with the
    store, mirroring the file-backed behaviour.
    """

    def __init__(self, collection: RecordCollection | None = None) -> None:
        self.lock = threading.RLock()
        self._document = (collection or RecordCollection()).model_dump_json(by_alias=True)
        self.save_calls = 0

    def load(self) -> RecordCollection:
        """Return a fresh copy of the stored collection."""
        return RecordCollection.model_validate_json(self._document)

    def save(self, collection: RecordCollection) -> None:
        """Replace the stored collection."""
        self._document = collection.model_dump_json(by_alias=True)
        self.save_calls += 1
