"""
Reference budget templates per project vertical.

Each template lists the standard cost lines a new solar plant (GES) or road
(YOL) project is budgeted against.  ``planned_amount`` is the reference
line total; ``unit_price`` is the price per ``unit``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from cost_modules.project.models import ProjectCategory


@dataclass(frozen=True)
class BudgetTemplateItem:
    """A single reference budget line."""
    id: str
    category: str
    item_name: str
    planned_amount: Decimal
    unit: str
    unit_price: Decimal


SOLAR_BUDGET_TEMPLATE: tuple[BudgetTemplateItem, ...] = (
    BudgetTemplateItem("g1", "Sivil İşler", "Hafriyat ve Saha Düzenleme", Decimal("500000"), "m2", Decimal("50")),
    BudgetTemplateItem("g2", "Mekanik", "Konstrüksiyon Montajı", Decimal("1200000"), "MW", Decimal("80000")),
    BudgetTemplateItem("g3", "Mekanik", "Panel Montajı", Decimal("2000000"), "Adet", Decimal("15")),
    BudgetTemplateItem("g4", "Elektrik", "DC Kablolama ve Inverter", Decimal("1500000"), "MW", Decimal("100000")),
    BudgetTemplateItem("g5", "Elektrik", "AC Orta Gerilim İşleri", Decimal("800000"), "Lump Sum", Decimal("800000")),
)

ROAD_BUDGET_TEMPLATE: tuple[BudgetTemplateItem, ...] = (
    BudgetTemplateItem("y1", "Toprak İşleri", "Kazı-Dolgu (Hafriyat)", Decimal("2500000"), "m3", Decimal("120")),
    BudgetTemplateItem("y2", "Üst Yapı", "Alt Temel Tabakası", Decimal("1200000"), "km", Decimal("300000")),
    BudgetTemplateItem("y3", "Üst Yapı", "Temel Tabakası", Decimal("1800000"), "km", Decimal("450000")),
    BudgetTemplateItem("y4", "Asfalt", "Bitümlü Sıcak Karışım", Decimal("4000000"), "ton", Decimal("2200")),
    BudgetTemplateItem("y5", "Sanat Yapıları", "Menfezler ve Drenaj", Decimal("900000"), "Adet", Decimal("45000")),
)


def template_for(category: ProjectCategory) -> tuple[BudgetTemplateItem, ...]:
    """Return the reference budget lines for a project vertical."""
    if category is ProjectCategory.SOLAR:
        return SOLAR_BUDGET_TEMPLATE
    return ROAD_BUDGET_TEMPLATE


def template_total(items: Sequence[BudgetTemplateItem]) -> Decimal:
    """Sum of ``planned_amount`` over a template."""
    return sum((item.planned_amount for item in items), Decimal("0"))


def planned_by_category(items: Sequence[BudgetTemplateItem]) -> dict[str, Decimal]:
    """Planned amount per template category, in first-seen order."""
    totals: dict[str, Decimal] = {}
    for item in items:
        totals[item.category] = totals.get(item.category, Decimal("0")) + item.planned_amount
    return totals
