from datetime import datetime
from typing import Iterable, Optional, Union

from core.domain import Aggregates, Period, Transaction
from core.lazy import category_breakdown, in_period, iter_transactions
from core.periods import coerce_period
from core.transforms import expense_transactions, income_transactions, running_balance, total_amount


def aggregate(
    transactions: Iterable[Transaction],
    period: Union[Period, str],
    now: Optional[datetime] = None,
    initial_balance: float = 0,
) -> Aggregates:
    """Compute every derived total from one snapshot of the store.

    Income, expense and the category breakdown follow ``period``; the
    balance always covers the whole history.
    """
    period = coerce_period(period)
    now = now or datetime.now()
    snapshot = tuple(transactions)
    filtered = tuple(iter_transactions(snapshot, in_period(period, now)))

    return Aggregates(
        period=period,
        evaluated_at=now,
        balance=running_balance(snapshot, initial_balance),
        period_income=total_amount(income_transactions(filtered)),
        period_expense=total_amount(expense_transactions(filtered)),
        category_breakdown=category_breakdown(filtered),
        filtered=filtered,
    )
