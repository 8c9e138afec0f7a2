"""Whole-store backup export and import.

A backup is one JSON document::

    {
      "customers": [...],
      "estimates": [...],
      "inventory": [...],
      "settings": {...},
      "timestamp": "2025-03-01T12:00:00+00:00"
    }

Import is all-or-nothing with respect to the payload: it is decoded, parsed and
every record validated before anything is written. A top-level key that is
absent (or null) leaves that collection as it is. Writes across keys are not
atomic; a storage failure partway through leaves the earlier collections
replaced.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from foamdesk.data.migrations import RecordKind, parse_record
from foamdesk.exceptions import DataImportError, SchemaMigrationError, StorageError

if TYPE_CHECKING:
    from foamdesk.data.repository import RecordStore

logger = logging.getLogger(__name__)

_COLLECTION_KINDS = (RecordKind.CUSTOMERS, RecordKind.ESTIMATES, RecordKind.INVENTORY)


def export_snapshot(store: RecordStore, now: datetime | None = None) -> dict[str, Any]:
    """Collect every collection plus settings into a JSON-ready dict."""
    timestamp = now or datetime.now(UTC)
    return {
        "customers": [c.model_dump(mode="json") for c in store.get_customers()],
        "estimates": [e.model_dump(mode="json") for e in store.get_estimates()],
        "inventory": [i.model_dump(mode="json") for i in store.get_inventory()],
        "settings": store.get_settings().model_dump(mode="json"),
        "timestamp": timestamp.isoformat(),
    }


def export_json(store: RecordStore, now: datetime | None = None) -> str:
    """Serialize :func:`export_snapshot` as pretty-printed JSON."""
    return json.dumps(export_snapshot(store, now), indent=2)


def backup_filename(now: datetime | None = None) -> str:
    """File name for a backup taken at ``now`` (``spf_backup_YYYY-MM-DD.json``)."""
    day = (now or datetime.now(UTC)).date().isoformat()
    return f"spf_backup_{day}.json"


def write_backup(store: RecordStore, directory: Path, now: datetime | None = None) -> Path:
    """Write a backup file into ``directory`` and return its path."""
    timestamp = now or datetime.now(UTC)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / backup_filename(timestamp)
    path.write_text(export_json(store, timestamp), encoding="utf-8")
    logger.info("Wrote backup to %s", path)
    return path


def _parse_collection(kind: RecordKind, raw: Any) -> list[Any]:
    if not isinstance(raw, list):
        msg = f"'{kind}' must be a list, got {type(raw).__name__}"
        raise DataImportError(msg)
    try:
        return [parse_record(kind, payload) for payload in raw]
    except SchemaMigrationError as exc:
        msg = f"Invalid record in '{kind}': {exc}"
        raise DataImportError(msg) from exc


def import_snapshot(store: RecordStore, content: str | bytes) -> list[RecordKind]:
    """Replace collections from a backup document.

    Returns:
        The kinds that were written, in write order.

    Raises:
        DataImportError: If the content is not UTF-8 JSON, is not an object, or
            any present collection fails validation. Nothing is written in
            that case.
    """
    try:
        data = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        msg = f"Backup is not valid JSON: {exc}"
        raise DataImportError(msg) from exc
    if not isinstance(data, dict):
        msg = f"Backup must be a JSON object, got {type(data).__name__}"
        raise DataImportError(msg)

    collections: dict[RecordKind, list[Any]] = {}
    for kind in _COLLECTION_KINDS:
        if data.get(kind.value) is not None:
            collections[kind] = _parse_collection(kind, data[kind.value])

    settings = None
    if data.get(RecordKind.SETTINGS.value) is not None:
        try:
            settings = parse_record(RecordKind.SETTINGS, data[RecordKind.SETTINGS.value])
        except SchemaMigrationError as exc:
            msg = f"Invalid settings: {exc}"
            raise DataImportError(msg) from exc

    written: list[RecordKind] = []
    for kind, records in collections.items():
        store.replace_collection(kind, records)
        written.append(kind)
    if settings is not None:
        store.save_settings(settings)  # type: ignore[arg-type]
        written.append(RecordKind.SETTINGS)

    logger.info("Imported backup: %s", ", ".join(k.value for k in written) or "nothing")
    return written


def import_data(store: RecordStore, content: str | bytes) -> bool:
    """Import a backup, reporting success as a boolean."""
    try:
        import_snapshot(store, content)
    except (DataImportError, StorageError):
        logger.exception("Import failed")
        return False
    return True
