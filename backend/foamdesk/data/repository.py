"""Record store for customers, estimates, inventory, settings and the session."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, TypeVar

from foamdesk.data.defaults import DEFAULT_SETTINGS, INITIAL_INVENTORY
from foamdesk.data.migrations import RecordKind, parse_record
from foamdesk.exceptions import RecordNotFoundError, SchemaMigrationError
from foamdesk.models.estimate import Estimate
from foamdesk.models.records import CompanySettings, Customer, InventoryItem, UserSession

if TYPE_CHECKING:
    from foamdesk.data.storage import StorageBackend

logger = logging.getLogger(__name__)

STORAGE_KEYS: dict[RecordKind, str] = {
    RecordKind.USER: "spf_user",
    RecordKind.CUSTOMERS: "spf_customers",
    RecordKind.ESTIMATES: "spf_estimates",
    RecordKind.INVENTORY: "spf_inventory",
    RecordKind.SETTINGS: "spf_settings",
}

_R = TypeVar("_R", Customer, Estimate, InventoryItem)


class RecordStore:
    """Typed get/save/delete over a string key-value backend.

    Each collection is one JSON array under its storage key. Records are
    upgraded and validated on every read; a record that cannot be loaded is
    logged and skipped so one bad entry never hides the rest.
    """

    def __init__(self, backend: StorageBackend) -> None:
        self._backend = backend

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def _read(self, kind: RecordKind) -> Any | None:
        raw = self._backend.get(STORAGE_KEYS[kind])
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.exception("Stored %s data is not valid JSON; ignoring it", kind)
            return None

    def _write(self, kind: RecordKind, payload: Any) -> None:
        self._backend.set(STORAGE_KEYS[kind], json.dumps(payload))

    def _load_collection(self, kind: RecordKind, raw: Any) -> list[Any]:
        if not isinstance(raw, list):
            logger.warning("Stored %s data is not a list; ignoring it", kind)
            return []
        records: list[Any] = []
        for index, payload in enumerate(raw):
            try:
                records.append(parse_record(kind, payload))
            except SchemaMigrationError as exc:
                logger.warning("Skipping %s record %d: %s", kind, index, exc)
        return records

    def _get_all(self, kind: RecordKind) -> list[Any]:
        raw = self._read(kind)
        if raw is None:
            return []
        return self._load_collection(kind, raw)

    def replace_collection(self, kind: RecordKind, records: list[Any]) -> None:
        """Overwrite a whole collection."""
        self._write(kind, [r.model_dump(mode="json") for r in records])

    def _upsert(self, kind: RecordKind, record: _R) -> _R:
        records = self._get_all(kind)
        for index, existing in enumerate(records):
            if existing.id == record.id:
                records[index] = record
                break
        else:
            records.append(record)
        self.replace_collection(kind, records)
        return record

    def _delete(self, kind: RecordKind, record_id: str) -> bool:
        records = self._get_all(kind)
        kept = [r for r in records if r.id != record_id]
        if len(kept) == len(records):
            return False
        self.replace_collection(kind, kept)
        return True

    def _get_one(self, kind: RecordKind, records: list[_R], record_id: str) -> _R:
        for record in records:
            if record.id == record_id:
                return record
        msg = f"No {kind} record with id '{record_id}'"
        raise RecordNotFoundError(msg)

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def get_customers(self) -> list[Customer]:
        return self._get_all(RecordKind.CUSTOMERS)

    def get_customer(self, customer_id: str) -> Customer:
        return self._get_one(RecordKind.CUSTOMERS, self.get_customers(), customer_id)

    def save_customer(self, customer: Customer) -> Customer:
        return self._upsert(RecordKind.CUSTOMERS, customer)

    def delete_customer(self, customer_id: str) -> bool:
        return self._delete(RecordKind.CUSTOMERS, customer_id)

    # ------------------------------------------------------------------
    # Estimates
    # ------------------------------------------------------------------

    def get_estimates(self) -> list[Estimate]:
        return self._get_all(RecordKind.ESTIMATES)

    def get_estimate(self, estimate_id: str) -> Estimate:
        return self._get_one(RecordKind.ESTIMATES, self.get_estimates(), estimate_id)

    def save_estimate(self, estimate: Estimate) -> Estimate:
        return self._upsert(RecordKind.ESTIMATES, estimate)

    def delete_estimate(self, estimate_id: str) -> bool:
        return self._delete(RecordKind.ESTIMATES, estimate_id)

    # ------------------------------------------------------------------
    # Inventory
    # ------------------------------------------------------------------

    def get_inventory(self) -> list[InventoryItem]:
        """Return the inventory, seeding the factory inventory on first use."""
        raw = self._read(RecordKind.INVENTORY)
        if raw is None:
            seeded = [item.model_copy(deep=True) for item in INITIAL_INVENTORY]
            self.replace_collection(RecordKind.INVENTORY, seeded)
            logger.info("Seeded inventory with %d default items", len(seeded))
            return seeded
        return self._load_collection(RecordKind.INVENTORY, raw)

    def get_inventory_item(self, item_id: str) -> InventoryItem:
        return self._get_one(RecordKind.INVENTORY, self.get_inventory(), item_id)

    def save_inventory_item(self, item: InventoryItem) -> InventoryItem:
        self.get_inventory()  # make sure the defaults exist before the first upsert
        return self._upsert(RecordKind.INVENTORY, item)

    def delete_inventory_item(self, item_id: str) -> bool:
        self.get_inventory()
        return self._delete(RecordKind.INVENTORY, item_id)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def get_settings(self) -> CompanySettings:
        """Return saved settings, or the factory defaults when none are saved."""
        raw = self._read(RecordKind.SETTINGS)
        if raw is not None:
            try:
                return parse_record(RecordKind.SETTINGS, raw)  # type: ignore[return-value]
            except SchemaMigrationError as exc:
                logger.warning("Falling back to default settings: %s", exc)
        return DEFAULT_SETTINGS.model_copy(deep=True)

    def save_settings(self, settings: CompanySettings) -> CompanySettings:
        self._write(RecordKind.SETTINGS, settings.model_dump(mode="json"))
        return settings

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def get_user(self) -> UserSession | None:
        raw = self._read(RecordKind.USER)
        if raw is None:
            return None
        try:
            return parse_record(RecordKind.USER, raw)  # type: ignore[return-value]
        except SchemaMigrationError as exc:
            logger.warning("Ignoring stored session: %s", exc)
            return None

    def save_user(self, user: UserSession) -> UserSession:
        self._write(RecordKind.USER, user.model_dump(mode="json"))
        return user

    def clear_user(self) -> None:
        self._backend.delete(STORAGE_KEYS[RecordKind.USER])

    # ------------------------------------------------------------------
    # Bulk
    # ------------------------------------------------------------------

    def clear_data(self) -> None:
        """Remove customers, estimates and inventory. Settings and session are kept."""
        for kind in (RecordKind.CUSTOMERS, RecordKind.ESTIMATES, RecordKind.INVENTORY):
            self._backend.delete(STORAGE_KEYS[kind])
        logger.info("Cleared customers, estimates and inventory")
