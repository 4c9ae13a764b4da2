"""
Data Models Package

This package contains all Pydantic models used by the expense splitter.
All data exchanged with the caller must conform to these schemas.
"""

from expense_splitter.models.expense import (
    Balance,
    Currency,
    Expense,
    ExpenseGroup,
    GroupSummary,
    Member,
    Settlement,
)
from expense_splitter.models.validation import (
    ValidationIssue,
    ValidationResult,
)
from expense_splitter.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "Balance",
    "Currency",
    "Expense",
    "ExpenseGroup",
    "GroupSummary",
    "Member",
    "Settlement",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
