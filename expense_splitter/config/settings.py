"""
Configuration Management for Expense Splitter

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All tunable numbers live here.
The tolerance band and rounding precision are shared by the balance
calculator, the settlement resolver and the validator, so they must
come from a single place.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from expense_splitter.money import Currency


class SplitterSettings(BaseSettings):
    """Settlement algorithm configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPLITTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    settlement_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Balances within this distance of zero are considered settled"
    )
    money_places: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places used when rounding output amounts"
    )
    duplicate_split_policy: Literal["charge_each", "deduplicate"] = Field(
        default="charge_each",
        description=(
            "How repeated member ids in an expense split are treated: "
            "'charge_each' charges one share per occurrence, "
            "'deduplicate' keeps only the first occurrence"
        )
    )
    warn_unknown_members: bool = Field(
        default=True,
        description="Log a warning when an expense references an unknown member id"
    )
    default_currency: Currency = Field(
        default=Currency.USD,
        description="Currency label used for groups that do not set one"
    )

    @field_validator("default_currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        """Currency codes are matched upper-case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def splitter(self) -> SplitterSettings:
        return SplitterSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.splitter
        results["splitter"] = True
    except ValueError as e:
        results["splitter"] = False
        results["splitter_error"] = str(e)

    return results
