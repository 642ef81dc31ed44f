"""Typed models for weather records and the persisted collection.

Attribute names are snake_case in Python; the JSON document and the HTTP
API use the camelCase aliases (``startDate``, ``weatherData`` ...).
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from weatherrec.utils.time import TimeUtils

# Fields that may not be cleared once a record exists
REQUIRED_FIELDS: Final = ("location", "start_date", "end_date")


def _clean_location(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("location must not be empty")
    return v


def _clean_date(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("date must not be empty")
    try:
        TimeUtils.parse_calendar_date(v)
    except ValueError as exc:
        raise ValueError(f"Invalid date format: {v!r}") from exc
    return v


def check_date_range(start_date: str, end_date: str) -> None:
    """Ensure a date range is not inverted.

    Args:
        start_date: First day of the range
        end_date: Last day of the range

    Raises:
        ValueError: If start_date falls after end_date
    """
    start = TimeUtils.parse_calendar_date(start_date)
    end = TimeUtils.parse_calendar_date(end_date)
    if start > end:
        raise ValueError("Start date must be before end date")


class RecordModel(BaseModel):
    """Base model using camelCase aliases on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        """Dump the model in its wire (camelCase) form."""
        return self.model_dump(mode="json", by_alias=True)


# ─────────────────────────── stored entities ─────────────────────────────────


class WeatherRecord(RecordModel):
    """A saved weather observation tied to a location and date range."""

    id: str
    location: str
    start_date: str
    end_date: str
    temperature: float | None = None
    weather_data: Any = None
    created_at: str
    updated_at: str


class RecordCollection(RecordModel):
    """Insertion-ordered records, unique by id.

    This is the whole persisted document: ``{"weatherRecords": [...]}``.
    """

    weather_records: list[WeatherRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> RecordCollection:
        seen: set[str] = set()
        for record in self.weather_records:
            if record.id in seen:
                raise ValueError(f"duplicate record id: {record.id}")
            seen.add(record.id)
        return self

    def __len__(self) -> int:
        return len(self.weather_records)

    def index_of(self, record_id: str) -> int:
        """Return the position of a record, or -1 if absent."""
        for i, record in enumerate(self.weather_records):
            if record.id == record_id:
                return i
        return -1

    def find(self, record_id: str) -> WeatherRecord | None:
        """Return the record with the given id, if any."""
        i = self.index_of(record_id)
        return self.weather_records[i] if i >= 0 else None


# ─────────────────────────── request structs ─────────────────────────────────


class RecordCreate(RecordModel):
    """Payload for creating a record: location plus date range."""

    location: str
    start_date: str
    end_date: str
    temperature: float | None = None
    weather_data: Any = None

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        return _clean_location(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _clean_date(v)

    @model_validator(mode="after")
    def validate_range(self) -> RecordCreate:
        check_date_range(self.start_date, self.end_date)
        return self


class RecordUpdate(RecordModel):
    """Partial update; only the fields actually supplied are applied.

    An explicit ``null`` clears ``temperature`` or ``weatherData`` but is
    ignored for location and dates, which a record always keeps.
    """

    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    temperature: float | None = None
    weather_data: Any = None

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str | None) -> str | None:
        return _clean_location(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def validate_dates(cls, v: str | None) -> str | None:
        return _clean_date(v)

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields keyed by attribute name."""
        supplied = self.model_dump(exclude_unset=True)
        return {
            k: v
            for k, v in supplied.items()
            if not (k in REQUIRED_FIELDS and v is None)
        }
