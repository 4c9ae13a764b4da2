"""Exceptions raised by the expense splitter core."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from expense_splitter.models.validation import ValidationResult


class SplitterError(Exception):
    """Base class for expense splitter errors."""
    pass


class EmptySplitError(SplitterError, ValueError):
    """An expense has nobody to split its amount between."""

    def __init__(self, expense_id: str, description: str = ""):
        self.expense_id = expense_id
        self.description = description
        label = f"'{description}' ({expense_id})" if description else expense_id
        super().__init__(
            f"Expense {label} has an empty split: "
            "at least one member must share the cost"
        )


class ExpenseValidationError(SplitterError):
    """Expenses failed boundary validation and cannot be settled."""

    def __init__(self, result: "ValidationResult"):
        self.result = result
        messages = [
            issue.message for issue in result.issues
            if issue.severity == "error"
        ]
        super().__init__(
            f"{len(messages)} validation error(s): " + "; ".join(messages)
        )
