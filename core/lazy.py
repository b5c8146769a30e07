from datetime import datetime
from typing import Callable, Dict, Iterable, Union

from core.domain import EXPENSE, NO_EXPENSES_LABEL, NO_EXPENSES_VALUE, Period, Transaction
from core.periods import is_within_period


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterable[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def by_kind(kind: str):
    def _filter(t: Transaction) -> bool:
        return t.kind == kind

    return _filter


def by_category(category: str):
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def in_period(period: Union[Period, str], now: datetime):
    def _filter(t: Transaction) -> bool:
        return is_within_period(t.date, period, now)

    return _filter


def category_totals(trans: Iterable[Transaction]) -> Dict[str, float]:
    """Expense sums per category, in order of first appearance."""
    totals: Dict[str, float] = {}
    for t in iter_transactions(trans, by_kind(EXPENSE)):
        totals[t.category] = totals.get(t.category, 0) + t.amount
    return totals


def category_breakdown(trans: Iterable[Transaction]) -> Dict[str, float]:
    """Like category_totals, but never empty.

    With no expenses the result is a single placeholder slice so a pie chart
    always has something to draw. Its value is not money.
    """
    totals = category_totals(trans)
    return totals or {NO_EXPENSES_LABEL: NO_EXPENSES_VALUE}
