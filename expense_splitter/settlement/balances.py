"""
Balance Calculator

Aggregates a group's expenses into one net balance per member.

For each expense the payer is credited the full amount and every entry
in the split is debited an equal share. Totals are kept unrounded while
expenses are processed; rounding happens once, when the ``Balance``
records are built, so the rounded balances still sum to zero within a
cent per expense.

Ids that are not in ``members`` are accounted for like any other id but
never appear in the output, which is shaped by the ``members`` list.
"""

from typing import Optional

import structlog

from expense_splitter.config import SplitterSettings, get_settings
from expense_splitter.errors import EmptySplitError
from expense_splitter.models.expense import Balance, Expense, Member
from expense_splitter.money import round_money

logger = structlog.get_logger(__name__)


def split_members(expense: Expense, policy: str = "charge_each") -> list[str]:
    """
    Member ids charged for an expense, one entry per share.

    With the ``deduplicate`` policy repeated ids are dropped, keeping
    the first occurrence.
    """
    if policy == "deduplicate":
        return list(dict.fromkeys(expense.split_between))
    return list(expense.split_between)


def calculate_balances(
    members: list[Member],
    expenses: list[Expense],
    settings: Optional[SplitterSettings] = None,
) -> list[Balance]:
    """
    Compute each member's net balance.

    Args:
        members: Group members; the output follows this order
        expenses: Expenses to aggregate, in any order
        settings: Rounding and duplicate policy (defaults to environment)

    Returns:
        One Balance per member. Positive means the member is owed money.

    Raises:
        EmptySplitError: An expense has an empty split.
    """
    settings = settings or get_settings().splitter
    places = settings.money_places

    net: dict[str, float] = {member.id: 0.0 for member in members}
    paid: dict[str, float] = dict.fromkeys(net, 0.0)
    owed: dict[str, float] = dict.fromkeys(net, 0.0)
    known = set(net)
    unknown: dict[str, str] = {}

    for expense in expenses:
        charged = split_members(expense, settings.duplicate_split_policy)
        if not charged:
            raise EmptySplitError(expense.id, expense.description)

        share = expense.amount / len(charged)

        net[expense.paid_by] = net.get(expense.paid_by, 0.0) + expense.amount
        paid[expense.paid_by] = paid.get(expense.paid_by, 0.0) + expense.amount
        if expense.paid_by not in known:
            unknown.setdefault(expense.paid_by, expense.id)

        for member_id in charged:
            net[member_id] = net.get(member_id, 0.0) - share
            owed[member_id] = owed.get(member_id, 0.0) + share
            if member_id not in known:
                unknown.setdefault(member_id, expense.id)

    if unknown and settings.warn_unknown_members:
        for member_id, expense_id in unknown.items():
            logger.warning(
                "unknown_member_reference",
                member_id=member_id,
                expense_id=expense_id,
                discarded_balance=round_money(net[member_id], places),
            )

    logger.debug(
        "balances_calculated",
        member_count=len(members),
        expense_count=len(expenses),
    )

    return [
        Balance(
            member_id=member.id,
            member_name=member.name,
            balance=round_money(net[member.id], places),
            total_paid=round_money(paid[member.id], places),
            total_share=round_money(owed[member.id], places),
        )
        for member in members
    ]
