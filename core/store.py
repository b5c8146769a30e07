import threading
from typing import Iterable, Iterator, Tuple

from core.domain import Transaction
from core.transforms import add_transaction


class TransactionStore:
    """Newest-first sequence of transactions that only ever grows.

    Writers swap in a new tuple under a lock; readers take the current tuple
    and never see a half-added record.
    """

    def __init__(self, initial: Iterable[Transaction] = ()):
        self._transactions: Tuple[Transaction, ...] = tuple(initial)
        self._lock = threading.Lock()

    def prepend(self, t: Transaction) -> Tuple[Transaction, ...]:
        with self._lock:
            self._transactions = add_transaction(self._transactions, t)
            return self._transactions

    def snapshot(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def __len__(self) -> int:
        return len(self._transactions)

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self._transactions)
