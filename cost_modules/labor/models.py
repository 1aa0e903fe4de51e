"""
Labor Domain Models (``cost_modules.labor.models``).

Responsibility
--------------
Timesheet entries for site workers.  The cost of an entry is computed by
``cost_engines.metrics.labor_cost`` from the daily rate, regular hours and
overtime hours.

Invariants enforced
-------------------
* ``frozen=True``.
* ``hours``, ``overtime`` and ``daily_rate`` are non-negative.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from cost_modules._codec import decimal_str, parse_date, require_finite, to_decimal


@dataclass(frozen=True)
class LaborRecord:
    """A timesheet entry against a project."""
    id: str
    project_id: str
    worker_name: str
    role: str
    hours: Decimal
    overtime: Decimal
    date: date
    daily_rate: Decimal

    def __post_init__(self) -> None:
        for name in ("hours", "overtime", "daily_rate"):
            require_finite(name, getattr(self, name))
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative, got {getattr(self, name)}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "project_id": self.project_id,
            "worker_name": self.worker_name,
            "role": self.role,
            "hours": decimal_str(self.hours),
            "overtime": decimal_str(self.overtime),
            "date": self.date.isoformat(),
            "daily_rate": decimal_str(self.daily_rate),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LaborRecord:
        return cls(
            id=str(data["id"]),
            project_id=str(data["project_id"]),
            worker_name=data["worker_name"],
            role=data.get("role", ""),
            hours=to_decimal(data.get("hours", "0")),
            overtime=to_decimal(data.get("overtime", "0")),
            date=parse_date(data["date"]),
            daily_rate=to_decimal(data["daily_rate"]),
        )
