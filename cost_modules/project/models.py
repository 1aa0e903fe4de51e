"""
Project Domain Models (``cost_modules.project.models``).

Responsibility
--------------
Frozen dataclass value objects for capital projects tracked by the cost
dashboard: the project itself, its vertical (solar plant or road) and its
lifecycle status.

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by the
metrics engine, the store and the services.

Invariants enforced
-------------------
* All models are ``frozen=True`` (immutable after construction).
* All monetary and quantity fields use ``Decimal`` -- NEVER ``float``.
* ``0 <= percent_complete <= 100``.
* ``total_budget > 0``.
* ``capacity >= 0``.

Failure modes
-------------
* Construction with an out-of-range field or unknown enum value raises
  ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from cost_modules._codec import (
    decimal_str,
    optional_date,
    optional_decimal,
    parse_date,
    require_finite,
    to_decimal,
)


class ProjectCategory(Enum):
    """Supported project verticals."""
    SOLAR = "solar"
    ROAD = "road"

    @property
    def unit_label(self) -> str:
        """Unit in which ``Project.capacity`` is measured."""
        return "MW" if self is ProjectCategory.SOLAR else "KM"


class ProjectStatus(Enum):
    """Project lifecycle states."""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    PLANNING = "PLANNING"

    @classmethod
    def _missing_(cls, value: object) -> ProjectStatus | None:
        if not isinstance(value, str):
            return None
        normalized = value.strip().upper()
        # Older records spell the planning state "PLANNED".
        if normalized == "PLANNED":
            return cls.PLANNING
        for member in cls:
            if member.value == normalized:
                return member
        return None


@dataclass(frozen=True)
class Project:
    """A capital project with cost tracking."""
    id: str
    name: str
    category: ProjectCategory
    location: str
    total_budget: Decimal
    capacity: Decimal
    start_date: date
    status: ProjectStatus = ProjectStatus.ACTIVE
    percent_complete: Decimal = Decimal("0")
    target_end_date: date | None = None
    target_co2_saved: Decimal | None = None  # tons

    def __post_init__(self) -> None:
        for name in ("percent_complete", "total_budget", "capacity", "target_co2_saved"):
            require_finite(name, getattr(self, name))
        if not (Decimal("0") <= self.percent_complete <= Decimal("100")):
            raise ValueError(
                f"percent_complete must be between 0 and 100, got {self.percent_complete}"
            )
        if self.total_budget <= 0:
            raise ValueError(f"total_budget must be positive, got {self.total_budget}")
        if self.capacity < 0:
            raise ValueError(f"capacity cannot be negative, got {self.capacity}")

    @property
    def unit_label(self) -> str:
        return self.category.unit_label

    @property
    def completion_ratio(self) -> Decimal:
        """``percent_complete`` as a fraction in [0, 1]."""
        return self.percent_complete / Decimal("100")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category.value,
            "location": self.location,
            "status": self.status.value,
            "total_budget": decimal_str(self.total_budget),
            "capacity": decimal_str(self.capacity),
            "start_date": self.start_date.isoformat(),
            "target_end_date": (
                self.target_end_date.isoformat() if self.target_end_date else None
            ),
            "percent_complete": decimal_str(self.percent_complete),
            "target_co2_saved": decimal_str(self.target_co2_saved),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Project:
        """Rebuild a project from a persisted record."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category=ProjectCategory(data["category"]),
            location=data.get("location", ""),
            status=ProjectStatus(data.get("status", "ACTIVE")),
            total_budget=to_decimal(data["total_budget"]),
            capacity=to_decimal(data.get("capacity") or "0"),
            start_date=parse_date(data["start_date"]),
            target_end_date=optional_date(data.get("target_end_date")),
            percent_complete=to_decimal(data.get("percent_complete", "0")),
            target_co2_saved=optional_decimal(data.get("target_co2_saved")),
        )
