"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain import Period
from core.functional import DEFAULT_CATEGORY
from core.services import TOAST_SECONDS


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every field can be overridden with an ``EXPENSE_MANAGER_`` prefixed
    variable or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_MANAGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Expense Manager"

    # Ledger
    initial_balance: float = 25000
    default_period: Period = Period.MONTH
    seed_path: str = "data/seed.json"
    categories: List[str] = ["Food", "Transport", "Entertainment", "Education", "Salary", "Other"]
    default_category: str = DEFAULT_CATEGORY
    methods: List[str] = ["Cash", "Debit", "Credit", "Transfer", "Digital wallet"]

    # UI
    toast_seconds: float = TOAST_SECONDS

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
