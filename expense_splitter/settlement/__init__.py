"""Balance calculation and settlement resolution."""

from expense_splitter.settlement.balances import calculate_balances, split_members
from expense_splitter.settlement.resolver import calculate_settlements

__all__ = ["calculate_balances", "calculate_settlements", "split_members"]
