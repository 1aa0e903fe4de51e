"""Inventory Module (``cost_modules.inventory``)."""

from cost_modules.inventory.models import InventoryItem, StockStatus

__all__ = [
    "InventoryItem",
    "StockStatus",
]
