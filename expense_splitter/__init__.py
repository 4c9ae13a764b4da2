"""
Expense Splitter - Source Package

Computes net balances for a group of people sharing expenses and
suggests the payments that settle them.

DESIGN PRINCIPLES:
1. Balances and settlements are pure functions of their inputs
2. Round once, at the output boundary
3. Fail loudly on expenses that cannot be split
4. Tolerate, but report, references to unknown members
"""

from expense_splitter.audit import AuditLogger
from expense_splitter.errors import (
    EmptySplitError,
    ExpenseValidationError,
    SplitterError,
)
from expense_splitter.models import (
    Balance,
    Currency,
    Expense,
    ExpenseGroup,
    GroupSummary,
    Member,
    Settlement,
)
from expense_splitter.orchestrator import SettlementFlow, create_app_components
from expense_splitter.settlement import calculate_balances, calculate_settlements

__version__ = "1.0.0"
__author__ = "Expense Splitter Team"

__all__ = [
    "AuditLogger",
    "Balance",
    "Currency",
    "EmptySplitError",
    "Expense",
    "ExpenseGroup",
    "ExpenseValidationError",
    "GroupSummary",
    "Member",
    "Settlement",
    "SettlementFlow",
    "SplitterError",
    "calculate_balances",
    "calculate_settlements",
    "create_app_components",
]
