"""
Settlement Resolver

Turns net balances into a short list of payments that settles the group.

Uses a greedy algorithm:
    1. Split members into debtors (balance below -tolerance) and
       creditors (balance above +tolerance); anything in between is
       already settled
    2. Sort debtors most negative first and creditors largest first
    3. Match the first debtor with the first creditor for the smaller
       of the two amounts, then drop whoever reached zero
    4. Stop as soon as either side runs out

This produces at most ``debtors + creditors - 1`` payments. It is not
guaranteed to be the minimum possible count; finding that is a
subset-sum problem and not worth it for group-sized inputs.

Whatever is left unmatched at the end is rounding residue from the
input balances and is dropped.
"""

from collections import deque
from typing import Optional

import structlog

from expense_splitter.config import SplitterSettings, get_settings
from expense_splitter.models.expense import Balance, Settlement
from expense_splitter.money import is_creditor, is_debtor, is_settled, round_money

logger = structlog.get_logger(__name__)


def calculate_settlements(
    balances: list[Balance],
    settings: Optional[SplitterSettings] = None,
) -> list[Settlement]:
    """
    Suggest payments that bring every balance back to zero.

    Args:
        balances: Net balances, in any order. Not modified.
        settings: Tolerance and rounding (defaults to environment)

    Returns:
        Settlements in the order they were matched. Empty if everyone
        is already within the tolerance of zero.
    """
    settings = settings or get_settings().splitter
    tolerance = settings.settlement_tolerance

    # Working copies; the caller's balances stay untouched
    working = [balance.model_copy() for balance in balances]

    # sorted() is stable, so ties keep their input order
    debtors = deque(sorted(
        (b for b in working if is_debtor(b.balance, tolerance)),
        key=lambda b: b.balance,
    ))
    creditors = deque(sorted(
        (b for b in working if is_creditor(b.balance, tolerance)),
        key=lambda b: b.balance,
        reverse=True,
    ))

    settlements: list[Settlement] = []

    while debtors and creditors:
        debtor = debtors[0]
        creditor = creditors[0]

        transfer = min(abs(debtor.balance), creditor.balance)
        amount = round_money(transfer, settings.money_places)
        if amount > 0:
            settlements.append(Settlement(
                from_member=debtor.member_name,
                to_member=creditor.member_name,
                amount=amount,
            ))

        debtor.balance += transfer
        creditor.balance -= transfer

        if is_settled(debtor.balance, tolerance):
            debtors.popleft()
        if is_settled(creditor.balance, tolerance):
            creditors.popleft()

    residual = sum(abs(b.balance) for b in (*debtors, *creditors))
    if residual:
        logger.debug(
            "settlement_residual_dropped",
            residual=round_money(residual, settings.money_places),
            unmatched=[b.member_name for b in (*debtors, *creditors)],
        )

    return settlements
