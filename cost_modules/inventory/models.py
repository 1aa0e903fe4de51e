"""
Inventory Domain Models (``cost_modules.inventory.models``).

Responsibility
--------------
Stock-keeping records for site materials.  The stock status is derived at
read time from ``quantity`` and ``min_stock`` and is never persisted.

Invariants enforced
-------------------
* ``frozen=True``; quantity changes produce a new record via ``replace``.
* ``quantity >= 0`` and ``min_stock >= 0``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from cost_modules._codec import decimal_str, parse_datetime, require_finite, to_decimal


class StockStatus(Enum):
    """Derived stock level of an inventory item."""
    CRITICAL = "critical"
    SUFFICIENT = "sufficient"


@dataclass(frozen=True)
class InventoryItem:
    """A stock-keeping record."""
    id: str
    name: str
    category: str
    quantity: Decimal
    unit: str
    min_stock: Decimal
    last_updated: datetime

    def __post_init__(self) -> None:
        require_finite("quantity", self.quantity)
        require_finite("min_stock", self.min_stock)
        if self.quantity < 0:
            raise ValueError(f"quantity cannot be negative, got {self.quantity}")
        if self.min_stock < 0:
            raise ValueError(f"min_stock cannot be negative, got {self.min_stock}")

    @property
    def stock_status(self) -> StockStatus:
        """CRITICAL when on-hand quantity is at or below the threshold."""
        if self.quantity <= self.min_stock:
            return StockStatus.CRITICAL
        return StockStatus.SUFFICIENT

    @property
    def is_critical(self) -> bool:
        return self.stock_status is StockStatus.CRITICAL

    def with_quantity(self, quantity: Decimal, updated_at: datetime) -> InventoryItem:
        return replace(self, quantity=quantity, last_updated=updated_at)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "quantity": decimal_str(self.quantity),
            "unit": self.unit,
            "min_stock": decimal_str(self.min_stock),
            "last_updated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InventoryItem:
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=data.get("category", ""),
            quantity=to_decimal(data["quantity"]),
            unit=data.get("unit", ""),
            min_stock=to_decimal(data.get("min_stock", "0")),
            last_updated=parse_datetime(data["last_updated"]),
        )
