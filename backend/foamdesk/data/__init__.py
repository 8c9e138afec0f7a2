"""Persistence layer for FoamDesk."""

from foamdesk.data.migrations import RecordKind
from foamdesk.data.repository import RecordStore
from foamdesk.data.storage import FileStorage, MemoryStorage, StorageBackend

__all__ = [
    "FileStorage",
    "MemoryStorage",
    "RecordKind",
    "RecordStore",
    "StorageBackend",
]
