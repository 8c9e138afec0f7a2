"""Stock adjustments and low-stock reporting."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from foamdesk.data.repository import RecordStore
    from foamdesk.models.records import InventoryItem

logger = logging.getLogger(__name__)


def apply_adjustment(item: InventoryItem, delta: float) -> InventoryItem:
    """Copy of ``item`` with ``delta`` added; quantity never drops below zero."""
    return item.model_copy(update={"quantity": max(0, item.quantity + delta)})


def adjust_quantity(store: RecordStore, item_id: str, delta: float) -> InventoryItem:
    """Apply ``delta`` to a stored item and save it."""
    item = apply_adjustment(store.get_inventory_item(item_id), delta)
    store.save_inventory_item(item)
    if is_low_stock(item):
        logger.info("%s is low on stock: %s %s", item.name, item.quantity, item.unit)
    return item


def is_low_stock(item: InventoryItem) -> bool:
    return item.quantity <= item.min_level


def stock_level_percent(item: InventoryItem) -> float:
    """Fill level for display, where twice the minimum level reads as 100%."""
    if item.min_level <= 0:
        return 100.0
    return min(100.0, item.quantity / (item.min_level * 2) * 100)


def low_stock_items(items: list[InventoryItem]) -> list[InventoryItem]:
    return [i for i in items if is_low_stock(i)]
