"""Weather records package - models, stores, CRUD service and errors."""

from .errors import (
    CorruptStoreError,
    NoDataError,
    NotFoundError,
    RecordError,
    StoreWriteError,
    ValidationError,
)
from .models import RecordCollection, RecordCreate, RecordUpdate, WeatherRecord
from .service import RecordService
from .store import JsonRecordStore, MemoryRecordStore, RecordStore

__all__ = [
    "CorruptStoreError",
    "JsonRecordStore",
    "MemoryRecordStore",
    "NoDataError",
    "NotFoundError",
    "RecordCollection",
    "RecordCreate",
    "RecordError",
    "RecordService",
    "RecordStore",
    "RecordUpdate",
    "StoreWriteError",
    "ValidationError",
    "WeatherRecord",
]
