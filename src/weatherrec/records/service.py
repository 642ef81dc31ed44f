"""Validated CRUD operations over a record store."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any, Final, TypeVar

from pydantic import ValidationError as PydanticValidationError

from weatherrec.records.errors import NotFoundError, ValidationError
from weatherrec.records.models import (
    RecordCreate,
    RecordModel,
    RecordUpdate,
    WeatherRecord,
    check_date_range,
)
from weatherrec.records.store import RecordStore
from weatherrec.utils.time import TimeUtils

logger: Final = logging.getLogger(__name__)

M = TypeVar("M", bound=RecordModel)


def _new_id() -> str:
    return uuid.uuid4().hex


def describe_validation_error(err: PydanticValidationError) -> str:
    """Turn a pydantic validation error into a one-line message.

    Args:
        err: Error raised while validating a request struct

    Returns:
        Message such as ``"startDate is required; Invalid date format: 'x'"``
    """
    parts: list[str] = []
    for e in err.errors():
        field = ".".join(str(p) for p in e["loc"])
        if e["type"] == "missing":
            parts.append(f"{field} is required")
        elif e["type"] == "value_error":
            # Raw ValueError text, without pydantic's "Value error, " prefix
            parts.append(str(e["ctx"]["error"]))
        elif field:
            parts.append(f"{field}: {e['msg']}")
        else:
            parts.append(e["msg"])
    return "; ".join(parts)


class RecordService:
    """Create, read, update and delete weather records.

    Every mutation loads the whole collection, applies the change and saves
    the whole collection back, all while holding the store's lock. Input is
    validated into typed request structs before the store is touched.
    """

    def __init__(
        self,
        store: RecordStore,
        clock: Callable[[], datetime] = TimeUtils.now_utc,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        """Initialize the service.

        Args:
            store: Backing record store
            clock: Source of the current time for timestamps
            id_factory: Generator for new record ids
        """
        self.store = store
        self._clock = clock
        self._id_factory = id_factory

    @staticmethod
    def _coerce(model: type[M], data: M | Mapping[str, Any]) -> M:
        if isinstance(data, model):
            return data
        try:
            return model.model_validate(data)
        except PydanticValidationError as err:
            raise ValidationError(describe_validation_error(err)) from err

    def _timestamp(self) -> str:
        return TimeUtils.to_iso_timestamp(self._clock())

    def create(self, data: RecordCreate | Mapping[str, Any]) -> WeatherRecord:
        """Validate and store a new record.

        Args:
            data: Location, date range and optional temperature/weather snapshot

        Returns:
            The stored record

        Raises:
            ValidationError: Missing fields, unparseable dates or inverted range
        """
        request = self._coerce(RecordCreate, data)
        now = self._timestamp()

        with self.store.lock:
            collection = self.store.load()
            record_id = self._id_factory()
            while collection.find(record_id) is not None:
                record_id = self._id_factory()

            record = WeatherRecord(
                id=record_id,
                location=request.location,
                start_date=request.start_date,
                end_date=request.end_date,
                temperature=request.temperature,
                weather_data=request.weather_data,
                created_at=now,
                updated_at=now,
            )
            collection.weather_records.append(record)
            self.store.save(collection)

        logger.info("Created record %s for %s", record.id, record.location)
        return record

    def list(self) -> list[WeatherRecord]:
        """Return all records in insertion order."""
        return self.store.load().weather_records

    def get(self, record_id: str) -> WeatherRecord:
        """Return one record.

        Raises:
            NotFoundError: If no record has that id
        """
        record = self.store.load().find(record_id)
        if record is None:
            raise NotFoundError(record_id)
        return record

    def update(
        self, record_id: str, data: RecordUpdate | Mapping[str, Any]
    ) -> WeatherRecord:
        """Merge supplied fields over an existing record.

        Args:
            record_id: Id of the record to change
            data: Fields to overwrite; anything not supplied is kept

        Returns:
            The updated record

        Raises:
            NotFoundError: If no record has that id
            ValidationError: Invalid field values or inverted date range
        """
        request = self._coerce(RecordUpdate, data)

        with self.store.lock:
            collection = self.store.load()
            index = collection.index_of(record_id)
            if index < 0:
                raise NotFoundError(record_id)

            current = collection.weather_records[index]
            merged = current.model_dump()
            merged.update(request.changes())
            try:
                check_date_range(merged["start_date"], merged["end_date"])
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc

            # updatedAt never moves backwards, even if the clock does
            merged["updated_at"] = max(self._timestamp(), current.updated_at)
            record = WeatherRecord.model_validate(merged)
            collection.weather_records[index] = record
            self.store.save(collection)

        logger.info("Updated record %s", record_id)
        return record

    def delete(self, record_id: str) -> None:
        """Remove a record.

        Raises:
            NotFoundError: If no record has that id
        """
        with self.store.lock:
            collection = self.store.load()
            index = collection.index_of(record_id)
            if index < 0:
                raise NotFoundError(record_id)
            del collection.weather_records[index]
            self.store.save(collection)

        logger.info("Deleted record %s", record_id)
