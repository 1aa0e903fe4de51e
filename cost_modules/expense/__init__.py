"""Expense Module (``cost_modules.expense``)."""

from cost_modules.expense.models import Expense, ExpenseType

__all__ = [
    "Expense",
    "ExpenseType",
]
