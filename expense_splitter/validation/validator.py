"""
Two-Stage Expense Validation

DESIGN DECISION: Expenses are checked at the boundary, before any
balance is computed.

STAGE 1 - SCHEMA VALIDATION:
- Positive, finite amounts
- A payer on every expense
- A non-empty split on every expense
- Anything failing here would make the balances meaningless

STAGE 2 - SEMANTIC VALIDATION:
- Payer and split ids that are not group members
- The same member listed twice in one split
- Two expenses sharing an id
- These are tolerated by the calculator, so they are only warnings

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the caller can decide.
"""

import math
from collections import Counter
from typing import Optional

from expense_splitter.config import SplitterSettings, get_settings
from expense_splitter.errors import ExpenseValidationError
from expense_splitter.models.expense import Expense, Member
from expense_splitter.models.validation import ValidationIssue, ValidationResult


class ExpenseValidator:
    """
    Validates a group's expenses through a two-stage pipeline.

    Stage 2 only runs when stage 1 found no errors.
    """

    def __init__(self, settings: Optional[SplitterSettings] = None):
        self._settings = settings or get_settings().splitter

    def _validate_schema(
        self,
        expenses: list[Expense],
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        for expense in expenses:
            if not expense.split_between:
                issues.append(ValidationIssue(
                    field="split_between",
                    issue_type="empty_split",
                    message=f"Expense '{expense.description or expense.id}' is not split between anyone",
                    severity="error",
                    expense_id=expense.id,
                    suggested_fix="Select at least one member to share this expense",
                ))

            amount = expense.amount
            if (
                not isinstance(amount, (int, float))
                or not math.isfinite(amount)
                or amount <= 0
            ):
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_amount",
                    message=f"Expense '{expense.description or expense.id}' has an invalid amount: {amount!r}",
                    severity="error",
                    expense_id=expense.id,
                    suggested_fix="Enter a positive amount",
                ))

            if not expense.paid_by:
                issues.append(ValidationIssue(
                    field="paid_by",
                    issue_type="missing_payer",
                    message=f"Expense '{expense.description or expense.id}' has no payer",
                    severity="error",
                    expense_id=expense.id,
                    suggested_fix="Select who paid for this expense",
                ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def _validate_semantic(
        self,
        members: list[Member],
        expenses: list[Expense],
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []
        member_ids = {member.id for member in members}

        for expense in expenses:
            label = expense.description or expense.id

            if expense.paid_by not in member_ids:
                issues.append(ValidationIssue(
                    field="paid_by",
                    issue_type="unknown_member",
                    message=f"Expense '{label}' was paid by unknown member {expense.paid_by}",
                    severity="warning",
                    expense_id=expense.id,
                    member_id=expense.paid_by,
                    suggested_fix="The payment will not appear in any balance",
                ))

            unknown = [mid for mid in dict.fromkeys(expense.split_between) if mid not in member_ids]
            for member_id in unknown:
                issues.append(ValidationIssue(
                    field="split_between",
                    issue_type="unknown_member",
                    message=f"Expense '{label}' is split with unknown member {member_id}",
                    severity="warning",
                    expense_id=expense.id,
                    member_id=member_id,
                    suggested_fix="That share will not appear in any balance",
                ))

            repeated = [
                mid for mid, count in Counter(expense.split_between).items()
                if count > 1
            ]
            for member_id in repeated:
                if self._settings.duplicate_split_policy == "deduplicate":
                    effect = "will be counted once"
                else:
                    effect = "will be charged once per listing"
                issues.append(ValidationIssue(
                    field="split_between",
                    issue_type="duplicate_split_member",
                    message=f"Member {member_id} is listed more than once on expense '{label}' and {effect}",
                    severity="warning",
                    expense_id=expense.id,
                    member_id=member_id,
                    suggested_fix="Remove the repeated member from the split",
                ))

        id_counts = Counter(expense.id for expense in expenses)
        for expense_id, count in id_counts.items():
            if count > 1:
                issues.append(ValidationIssue(
                    field="id",
                    issue_type="duplicate_expense_id",
                    message=f"{count} expenses share the id {expense_id}",
                    severity="warning",
                    expense_id=expense_id,
                    suggested_fix="Check the expense was not entered twice",
                ))

        is_valid = not any(issue.severity == "error" for issue in issues)

        return is_valid, issues

    def validate(
        self,
        members: list[Member],
        expenses: list[Expense],
    ) -> ValidationResult:
        """
        Run full two-stage validation pipeline.

        Args:
            members: Members of the group
            expenses: Expenses to check against those members

        Returns:
            ValidationResult with all issues found
        """
        all_issues = []

        schema_valid, schema_issues = self._validate_schema(expenses)
        all_issues.extend(schema_issues)

        # Only run stage 2 if stage 1 passes
        semantic_valid = False
        if schema_valid:
            semantic_valid, semantic_issues = self._validate_semantic(members, expenses)
            all_issues.extend(semantic_issues)

        warnings = [
            issue.message for issue in all_issues
            if issue.severity == "warning"
        ]

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=schema_valid and semantic_valid,
            issues=all_issues,
            warnings=warnings,
        )

    def require_valid(
        self,
        members: list[Member],
        expenses: list[Expense],
    ) -> ValidationResult:
        """
        Validate and raise if any error-level issue was found.

        Raises:
            ExpenseValidationError: carrying the full ValidationResult
        """
        result = self.validate(members, expenses)
        if result.has_errors:
            raise ExpenseValidationError(result)
        return result

    def get_summary(self, result: ValidationResult) -> str:
        """Plain-text summary of validation results."""
        if result.is_valid and not result.warnings:
            return "All checks passed."

        lines = []

        if result.has_errors:
            lines.append("Some expenses cannot be settled:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"  - {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"    Fix: {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("Please verify the following:")
            for warning in result.warnings:
                lines.append(f"  - {warning}")

        return "\n".join(lines)
