"""
Main Orchestrator for Expense Splitter

Defines the end-to-end settle-up flow for a group:
expenses → validate → balances → settlements → summary

DESIGN DECISION: The orchestrator enforces the boundaries:
- No balance is computed from expenses that failed validation
- Tolerated problems travel with the result as warnings
- Every step is audited

The calculator and resolver stay pure functions; this module is the
only place that combines them with validation and auditing.
"""

from typing import Optional
from uuid import UUID

from expense_splitter.audit import AuditLogger, create_correlation_id
from expense_splitter.config import SplitterSettings, get_settings
from expense_splitter.errors import ExpenseValidationError
from expense_splitter.models.expense import ExpenseGroup, GroupSummary
from expense_splitter.settlement import calculate_balances, calculate_settlements
from expense_splitter.validation import ExpenseValidator


class SettlementFlow:
    """
    Orchestrates settling up a group.

    Flow:
    1. Validate → Reject empty splits and invalid amounts
    2. Balances → Net position per member
    3. Settlements → Greedy debtor/creditor matching
    4. Summary → Everything the caller needs to render
    """

    def __init__(
        self,
        validator: Optional[ExpenseValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[SplitterSettings] = None,
    ):
        self._settings = settings or get_settings().splitter
        self._validator = validator or ExpenseValidator(self._settings)
        self._audit_logger = audit_logger

    def summarize(
        self,
        group: ExpenseGroup,
        correlation_id: Optional[UUID] = None,
    ) -> GroupSummary:
        """
        Settle up a group.

        Returns:
            GroupSummary with balances in member order and the
            suggested settlements.

        Raises:
            ExpenseValidationError: if any expense cannot be settled.
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            validation = self._validator.require_valid(group.members, group.expenses)
        except ExpenseValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    group_id=group.id,
                    issues=[issue.model_dump() for issue in e.result.issues],
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            self._audit_logger.log_validation_passed(
                group_id=group.id,
                warning_count=len(validation.warnings),
                correlation_id=correlation_id,
            )
            for issue in validation.issues:
                if issue.issue_type == "unknown_member" and issue.member_id:
                    self._audit_logger.log_unknown_member(
                        expense_id=issue.expense_id,
                        member_id=issue.member_id,
                        correlation_id=correlation_id,
                    )

        balances = calculate_balances(group.members, group.expenses, self._settings)

        if self._audit_logger:
            self._audit_logger.log_balances_calculated(
                group_id=group.id,
                member_count=len(group.members),
                expense_count=len(group.expenses),
                correlation_id=correlation_id,
            )

        settlements = calculate_settlements(balances, self._settings)

        summary = GroupSummary(
            group_id=group.id,
            group_name=group.name,
            currency=group.currency,
            total_expenses=group.total_expenses,
            balances=balances,
            settlements=settlements,
            warnings=validation.warnings,
            settlement_tolerance=self._settings.settlement_tolerance,
        )

        if self._audit_logger:
            self._audit_logger.log_settlements_calculated(
                group_id=group.id,
                settlement_count=summary.settlement_count,
                total_settled=summary.total_settled,
                correlation_id=correlation_id,
            )

        return summary


def create_app_components(
    settings: Optional[SplitterSettings] = None,
) -> dict:
    """
    Create all application components.

    Returns a dict with the settle-up flow and the pieces it was
    built from.
    """
    settings = settings or get_settings().splitter

    audit_logger = AuditLogger()
    validator = ExpenseValidator(settings)
    flow = SettlementFlow(
        validator=validator,
        audit_logger=audit_logger,
        settings=settings,
    )

    return {
        "settlement_flow": flow,
        "validator": validator,
        "audit_logger": audit_logger,
    }
