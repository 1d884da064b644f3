"""
Record persistence
"""
from .record_store import (
    RecordStore,
    JsonFileRecordStore,
    InMemoryRecordStore,
    KeyedLocks,
    create_record_store,
)

__all__ = [
    "RecordStore",
    "JsonFileRecordStore",
    "InMemoryRecordStore",
    "KeyedLocks",
    "create_record_store",
]
