"""
Core Data Models for Expense Splitter

These models define the schemas for everything exchanged with the
collaborator that owns the user interface:

- ``Member`` and ``Expense`` come in
- ``Balance`` and ``Settlement`` go out

Python attributes are snake_case. The camelCase keys used by the
frontend (``paidBy``, ``splitBetween``, ``memberId``...) are accepted as
aliases and produced by ``model_dump(by_alias=True)``.

DESIGN DECISION: Expenses are validated on construction.
An empty split or a non-positive amount can never reach the calculator
through a regular ``Expense``; the calculator still guards against
records built with ``model_construct``.
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from expense_splitter.config import get_settings
from expense_splitter.money import (
    SETTLEMENT_TOLERANCE,
    Currency,
    is_creditor,
    is_debtor,
    round_money,
)


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _default_currency() -> Currency:
    return get_settings().splitter.default_currency


# =============================================================================
# INPUT MODELS
# =============================================================================

class Member(BaseModel):
    """
    A person taking part in a group.

    Identity is ``id``. ``name`` is only for display and may repeat.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        default_factory=_new_id,
        min_length=1,
        description="Unique member identifier"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display name"
    )


class Expense(BaseModel):
    """
    A shared expense paid by one member and split equally.

    ``paid_by`` does not have to appear in ``split_between``.
    A member id listed twice in ``split_between`` is charged twice
    unless the duplicate split policy says otherwise.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(
        default_factory=_new_id,
        min_length=1,
        description="Unique expense identifier"
    )
    description: str = Field(
        default="",
        max_length=200,
        description="What the money was spent on"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Amount paid, already converted to the group currency"
    )
    paid_by: str = Field(
        ...,
        min_length=1,
        description="Member id of the payer"
    )
    split_between: list[str] = Field(
        ...,
        min_length=1,
        description="Ordered member ids sharing the expense"
    )
    date: datetime = Field(
        default_factory=_utcnow,
        description="When the expense happened"
    )

    @property
    def share(self) -> float:
        """Unrounded amount charged per split entry."""
        return self.amount / len(self.split_between)


class ExpenseGroup(BaseModel):
    """
    A group of members and the expenses they share.

    Member ids must be unique within the group.
    """
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(default_factory=_new_id, min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    members: list[Member] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    currency: Currency = Field(default_factory=_default_currency)

    @model_validator(mode='after')
    def validate_unique_members(self) -> 'ExpenseGroup':
        """Reject groups where two members share an id."""
        seen = set()
        for member in self.members:
            if member.id in seen:
                raise ValueError(f"Duplicate member id in group: {member.id}")
            seen.add(member.id)
        return self

    @property
    def total_expenses(self) -> float:
        return round_money(sum(expense.amount for expense in self.expenses))

    def member_name(self, member_id: str) -> str:
        """Display name for a member id, falling back to the id itself."""
        for member in self.members:
            if member.id == member_id:
                return member.name
        return member_id


# =============================================================================
# DERIVED MODELS
# =============================================================================

class Balance(BaseModel):
    """
    Net position of one member.

    Positive means the member is owed money, negative means they owe.
    ``total_paid`` and ``total_share`` break the balance down into what
    the member paid and what they consumed.

    The ``is_*`` properties classify against the default tolerance;
    ``GroupSummary.is_settled_up`` uses the tolerance the group was
    resolved with.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    member_id: str
    member_name: str
    balance: float
    total_paid: float = 0.0
    total_share: float = 0.0

    @property
    def is_creditor(self) -> bool:
        return is_creditor(self.balance, SETTLEMENT_TOLERANCE)

    @property
    def is_debtor(self) -> bool:
        return is_debtor(self.balance, SETTLEMENT_TOLERANCE)

    @property
    def is_settled(self) -> bool:
        return not (self.is_creditor or self.is_debtor)


class Settlement(BaseModel):
    """
    A directed payment instruction: ``from_member`` pays ``to_member``.

    Members are referenced by display name. Serialises with the
    ``from`` / ``to`` keys.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    from_member: str = Field(..., alias="from", description="Name of the member who pays")
    to_member: str = Field(..., alias="to", description="Name of the member who receives")
    amount: float = Field(..., gt=0, description="Amount to transfer")


class GroupSummary(BaseModel):
    """
    Result of settling up a whole group.

    Computed from scratch on every request, never stored.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    group_id: str
    group_name: str
    currency: Currency
    total_expenses: float = Field(ge=0)
    balances: list[Balance] = Field(default_factory=list)
    settlements: list[Settlement] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking validation warnings"
    )
    settlement_tolerance: float = Field(
        default=SETTLEMENT_TOLERANCE,
        gt=0,
        description="Dead zone the settlements were resolved with"
    )
    computed_at: datetime = Field(default_factory=_utcnow)

    @property
    def settlement_count(self) -> int:
        return len(self.settlements)

    @property
    def total_settled(self) -> float:
        """Sum of all settlement amounts."""
        return round_money(sum(s.amount for s in self.settlements))

    @property
    def is_settled_up(self) -> bool:
        """True when no balance is outside the summary's tolerance."""
        tolerance = self.settlement_tolerance
        return not any(
            is_creditor(b.balance, tolerance) or is_debtor(b.balance, tolerance)
            for b in self.balances
        )
