"""
Expense Domain Models (``cost_modules.expense.models``).

Responsibility
--------------
A single cost transaction booked against a project, optionally carrying the
physical quantity it bought (e.g. 120 m3 of fill, 40 ton of asphalt).

Invariants enforced
-------------------
* ``frozen=True`` -- expenses are never edited, only deleted.
* ``amount > 0``.
* ``quantity`` and ``unit`` are given together or not at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from cost_modules._codec import (
    decimal_str,
    optional_decimal,
    parse_date,
    require_finite,
    to_decimal,
)


class ExpenseType(Enum):
    """Cost type of an expense."""
    MATERIAL = "MATERIAL"
    LABOR = "LABOR"
    MACHINE = "MACHINE"
    FUEL = "FUEL"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Expense:
    """A cost transaction against a project."""
    id: str
    project_id: str
    amount: Decimal
    category: str
    description: str
    date: date
    type: ExpenseType = ExpenseType.MATERIAL
    quantity: Decimal | None = None
    unit: str | None = None

    def __post_init__(self) -> None:
        require_finite("amount", self.amount)
        require_finite("quantity", self.quantity)
        if self.amount <= 0:
            raise ValueError(f"amount must be positive, got {self.amount}")
        if (self.quantity is None) != (self.unit is None):
            raise ValueError("quantity and unit must be given together")

    @property
    def unit_price(self) -> Decimal | None:
        """Amount per physical unit, when a non-zero quantity is recorded."""
        if not self.quantity:
            return None
        return (self.amount / self.quantity).quantize(Decimal("0.01"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "amount": decimal_str(self.amount),
            "quantity": decimal_str(self.quantity),
            "unit": self.unit,
            "category": self.category,
            "description": self.description,
            "date": self.date.isoformat(),
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Expense:
        return cls(
            id=str(data["id"]),
            project_id=str(data["project_id"]),
            amount=to_decimal(data["amount"]),
            quantity=optional_decimal(data.get("quantity")),
            unit=data.get("unit") or None,
            category=data.get("category", ""),
            description=data.get("description", ""),
            date=parse_date(data["date"]),
            type=ExpenseType(data.get("type", "MATERIAL")),
        )
