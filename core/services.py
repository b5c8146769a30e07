from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional, Tuple, Union

from core.aggregation import aggregate
from core.domain import EXPENSE, Aggregates, ErrorKind, Period, Transaction
from core.events import (
    PERIOD_CHANGED,
    TRANSACTION_ADDED,
    TRANSACTION_REJECTED,
    EventBus,
    register_default_handlers,
)
from core.functional import DEFAULT_CATEGORY, validate_and_build
from core.periods import coerce_period
from core.store import TransactionStore

TOAST_SECONDS = 2.5


@dataclass(frozen=True)
class SubmitResult:
    accepted: bool
    message: str
    error: Optional[ErrorKind] = None
    transaction: Optional[Transaction] = None


@dataclass(frozen=True)
class Toast:
    text: str
    tone: str               # "ok" or "err"
    seconds: float = TOAST_SECONDS


class FinanceTracker:
    """One user's session: the store, the selected period and the clock.

    Totals are never cached; get_aggregates recomputes them from a single
    snapshot of the store on every call.
    """

    def __init__(
        self,
        store: Optional[TransactionStore] = None,
        initial_balance: float = 0,
        clock: Optional[Callable[[], datetime]] = None,
        bus: Optional[EventBus] = None,
        period: Union[Period, str] = Period.MONTH,
        default_category: str = DEFAULT_CATEGORY,
        toast_seconds: float = TOAST_SECONDS,
    ):
        self.store = store if store is not None else TransactionStore()
        self.initial_balance = initial_balance
        self.clock = clock or datetime.now
        self.bus = bus if bus is not None else register_default_handlers(EventBus())
        self.default_category = default_category
        self.toast_seconds = toast_seconds
        self._period = coerce_period(period)

    @property
    def period(self) -> Period:
        return self._period

    @property
    def transactions(self) -> Tuple[Transaction, ...]:
        return self.store.snapshot()

    def set_period(self, period: Union[Period, str]) -> Period:
        previous, self._period = self._period, coerce_period(period)
        if previous is not self._period:
            self.bus.publish(PERIOD_CHANGED, {"previous": previous.value, "period": self._period.value})
        return self._period

    def submit_transaction(self, form: Mapping[str, object], kind: Optional[str] = None) -> SubmitResult:
        result = validate_and_build(
            form, kind=kind, now=self.clock(), default_category=self.default_category
        )

        if result.is_left():
            error = result.get_error()
            self.bus.publish(TRANSACTION_REJECTED, {"error": error.kind.value})
            return SubmitResult(accepted=False, message=error.message, error=error.kind)

        t = result.get_or_else(None)
        self.store.prepend(t)
        self.bus.publish(TRANSACTION_ADDED, {
            "kind": t.kind,
            "category": t.category,
            "amount": t.amount,
            "date": t.date,
            "count": len(self.store),
        })
        message = "Expense saved" if t.kind == EXPENSE else "Income saved"
        return SubmitResult(accepted=True, message=message, transaction=t)

    def get_aggregates(self, period: Union[Period, str, None] = None) -> Aggregates:
        return aggregate(
            self.store.snapshot(),
            self._period if period is None else period,
            now=self.clock(),
            initial_balance=self.initial_balance,
        )

    def toast_for(self, result: SubmitResult) -> Toast:
        return Toast(
            text=result.message,
            tone="ok" if result.accepted else "err",
            seconds=self.toast_seconds,
        )
