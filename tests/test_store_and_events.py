from datetime import datetime
from pathlib import Path

import pytest

from core.domain import Transaction
from core.events import (
    Event, EventBus, TRANSACTION_ADDED, PERIOD_CHANGED,
    log_event_handler, register_default_handlers,
)
from core.store import TransactionStore
from core.transforms import add_transaction, load_seed

SEED_PATH = Path(__file__).resolve().parent.parent / "data" / "seed.json"


def make_tx(description, date="2026-10-14"):
    return Transaction(date=date, category="Food", kind="expense", description=description, amount=100)


def test_add_transaction_prepends_without_mutating():
    t1, t2 = make_tx("first"), make_tx("second")
    transactions = (t1,)
    new_transactions = add_transaction(transactions, t2)

    assert new_transactions == (t2, t1)
    assert transactions == (t1,)


def test_store_is_newest_first():
    store = TransactionStore([make_tx("seed")])
    store.prepend(make_tx("a"))
    store.prepend(make_tx("b"))
    assert [t.description for t in store] == ["b", "a", "seed"]
    assert len(store) == 3


def test_snapshot_is_not_affected_by_later_writes():
    store = TransactionStore()
    store.prepend(make_tx("a"))
    snapshot = store.snapshot()
    store.prepend(make_tx("b"))
    assert len(snapshot) == 1
    assert len(store.snapshot()) == 2


def test_transaction_is_immutable():
    t = make_tx("a")
    with pytest.raises(AttributeError):
        t.amount = 5


def test_event_bus_subscribe_and_publish():
    bus = EventBus()
    collected = []

    def handler(event: Event, payload: dict) -> dict:
        collected.append(payload)
        return {"processed": True}

    bus.subscribe(TRANSACTION_ADDED, handler)
    results = bus.publish(TRANSACTION_ADDED, {"amount": 50})

    assert results == [{"processed": True}]
    assert collected == [{"amount": 50}]


def test_event_bus_multiple_subscribers_and_unsubscribe():
    bus = EventBus()

    def h1(event, payload):
        return {"handler": 1}

    def h2(event, payload):
        return {"handler": 2}

    bus.subscribe(TRANSACTION_ADDED, h1)
    bus.subscribe(TRANSACTION_ADDED, h2)
    assert bus.publish(TRANSACTION_ADDED, {}) == [{"handler": 1}, {"handler": 2}]

    bus.unsubscribe(TRANSACTION_ADDED, h1)
    assert bus.publish(TRANSACTION_ADDED, {}) == [{"handler": 2}]


def test_publish_without_subscribers():
    assert EventBus().publish(PERIOD_CHANGED, {"period": "week"}) == []


def test_default_handlers_log_events():
    bus = register_default_handlers(EventBus())
    assert bus.publish(PERIOD_CHANGED, {"previous": "month", "period": "week"}) == [{"logged": True}]


def test_log_event_handler():
    event = Event(name=TRANSACTION_ADDED, ts=datetime.now().isoformat(), payload={"amount": 1})
    assert log_event_handler(event, event.payload) == {"logged": True}


def test_load_seed_resolves_relative_dates():
    now = datetime(2026, 10, 14, 9, 0)
    transactions = load_seed(str(SEED_PATH), now=now)

    assert len(transactions) == 7
    assert [t.date for t in transactions[:4]] == ["2026-10-14"] * 4
    assert transactions[4].date == "2025-11-02"
    assert all(t.amount > 0 for t in transactions)
    assert transactions[3].kind == "income"


def test_load_seed_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_seed(str(tmp_path / "missing.json"))


def test_load_seed_rejects_bad_rows(tmp_path):
    path = tmp_path / "seed.json"
    path.write_text('{"transactions": [{"date": "2026-01-01", "category": "Food", '
                    '"kind": "expense", "description": "x", "amount": -3}]}', encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed(str(path))
