"""Expense validation package."""

from expense_splitter.validation.validator import ExpenseValidator

__all__ = ["ExpenseValidator"]
