"""Custom exception hierarchy for FoamDesk."""

from __future__ import annotations


class FoamDeskError(Exception):
    """Base exception for all FoamDesk errors."""


class StorageError(FoamDeskError):
    """Raised when the storage backend cannot read or write a key."""


class DataImportError(FoamDeskError):
    """Raised when a backup snapshot cannot be parsed or validated."""


class RecordNotFoundError(FoamDeskError):
    """Raised when a record id does not exist in its collection."""


class EstimateCommitError(FoamDeskError):
    """Raised when an estimate cannot be committed to the record store."""


class SchemaMigrationError(FoamDeskError):
    """Raised when a persisted record cannot be upgraded to the current schema."""
