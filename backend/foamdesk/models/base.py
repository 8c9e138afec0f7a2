"""Base class for records persisted in the record store."""

from __future__ import annotations

from pydantic import BaseModel

# Bump when a persisted record shape changes; add the matching step to
# foamdesk.data.migrations.
SCHEMA_VERSION = 1


class VersionedRecord(BaseModel):
    """A persisted record stamped with the schema version it was written with."""

    schema_version: int = SCHEMA_VERSION
