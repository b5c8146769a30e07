from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple

EXPENSE = "expense"
INCOME = "income"
KINDS = (EXPENSE, INCOME)

# Placeholder slice for charts when a period has no expenses
NO_EXPENSES_LABEL = "No expenses"
NO_EXPENSES_VALUE = 1


class Period(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL_TIME = "all-time"


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    FUTURE_DATE = "future_date"


@dataclass(frozen=True)
class Transaction:
    date: str            # "YYYY-MM-DD", local calendar day
    category: str
    kind: str            # "expense" or "income"
    description: str
    amount: float        # always positive, kind carries the sign
    method: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"Unknown transaction kind: {self.kind!r}")
        if not self.amount > 0:
            raise ValueError(f"Transaction amount must be positive, got {self.amount!r}")

    @property
    def signed_amount(self) -> float:
        return self.amount if self.kind == INCOME else -self.amount


@dataclass(frozen=True)
class ValidationError:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class Aggregates:
    period: Period
    evaluated_at: datetime
    balance: float
    period_income: float
    period_expense: float
    category_breakdown: Dict[str, float]
    filtered: Tuple[Transaction, ...] = field(default=())

    @property
    def has_expenses(self) -> bool:
        """False when category_breakdown only holds the chart placeholder."""
        return self.period_expense > 0

    @property
    def period_net(self) -> float:
        return self.period_income - self.period_expense
