"""
Sample group for demos and tests.

Four roommates with mixed participation: not every expense is split
between everyone. Expected results:

    Alice  paid 100.00, owes 55.00  ->  +45.00
    Bob    paid  60.00, owes 68.33  ->   -8.33
    Carol  paid  40.00, owes 38.33  ->   +1.67
    Dave   paid   0.00, owes 38.33  ->  -38.33

Settled in three payments: Dave -> Alice, Bob -> Alice, Bob -> Carol.
"""

from datetime import datetime, timezone

from expense_splitter.models.expense import Currency, Expense, ExpenseGroup, Member

SAMPLE_GROUP_NAME = "Apartment 4B Roommates"

EXPECTED_BALANCES = {
    "Alice": 45.00,
    "Bob": -8.33,
    "Carol": 1.67,
    "Dave": -38.33,
}


def build_sample_members() -> list[Member]:
    return [
        Member(id="1", name="Alice"),
        Member(id="2", name="Bob"),
        Member(id="3", name="Carol"),
        Member(id="4", name="Dave"),
    ]


def build_sample_expenses() -> list[Expense]:
    when = datetime(2024, 1, 15, tzinfo=timezone.utc)
    return [
        Expense(
            id="e1",
            description="Groceries - Weekly Shopping",
            amount=100.00,
            paid_by="1",
            split_between=["1", "2", "3", "4"],
            date=when,
        ),
        Expense(
            id="e2",
            description="Utility Bill - Alice & Bob's Rooms",
            amount=60.00,
            paid_by="2",
            split_between=["1", "2"],
            date=when,
        ),
        Expense(
            id="e3",
            description="Pizza Night",
            amount=40.00,
            paid_by="3",
            split_between=["2", "3", "4"],
            date=when,
        ),
    ]


def build_sample_group() -> ExpenseGroup:
    """The roommates group with all three expenses."""
    return ExpenseGroup(
        id="apartment-4b",
        name=SAMPLE_GROUP_NAME,
        members=build_sample_members(),
        expenses=build_sample_expenses(),
        currency=Currency.USD,
    )
