import json
from datetime import datetime, timedelta
from functools import reduce
from typing import Iterable, Optional, Tuple

import structlog

from core.domain import EXPENSE, INCOME, Transaction
from core.periods import local_day

logger = structlog.get_logger(__name__)


def _seed_date(row: dict, now: datetime) -> str:
    if "days_ago" in row:
        return (local_day(now) - timedelta(days=int(row["days_ago"]))).isoformat()
    return row["date"]


def load_seed(path: str, now: Optional[datetime] = None) -> Tuple[Transaction, ...]:
    """Read demo transactions, newest first.

    A row either has a fixed ``date`` or a ``days_ago`` offset counted back
    from the local day of ``now``.
    """
    now = now or datetime.now()
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    transactions = tuple(
        Transaction(
            date=_seed_date(row, now),
            category=row["category"],
            kind=row["kind"],
            description=row["description"],
            amount=row["amount"],
            method=row.get("method"),
            note=row.get("note"),
        )
        for row in data["transactions"]
    )
    logger.info("seed_loaded", path=path, count=len(transactions))
    return transactions


def add_transaction(
    trans: Tuple[Transaction, ...], t: Transaction
) -> Tuple[Transaction, ...]:
    return (t,) + trans


def income_transactions(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.kind == INCOME, trans))


def expense_transactions(trans: Iterable[Transaction]) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.kind == EXPENSE, trans))


def total_amount(trans: Iterable[Transaction]) -> float:
    return reduce(lambda acc, t: acc + t.amount, trans, 0)


def running_balance(trans: Tuple[Transaction, ...], initial_balance: float = 0) -> float:
    """All-time balance; never scoped to a period."""
    return (
        initial_balance
        + total_amount(income_transactions(trans))
        - total_amount(expense_transactions(trans))
    )
