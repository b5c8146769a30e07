from datetime import datetime
from itertools import islice

from core.aggregation import aggregate
from core.domain import NO_EXPENSES_LABEL, Period, Transaction
from core.lazy import by_category, by_kind, category_breakdown, category_totals, iter_transactions
from core.transforms import expense_transactions, income_transactions, running_balance, total_amount

NOW = datetime(2026, 10, 14, 15, 30)


def make_tx(date, kind, amount, category="Other", description="x"):
    return Transaction(date=date, category=category, kind=kind, description=description, amount=amount)


def make_sample():
    return (
        make_tx("2026-10-14", "expense", 1500, "Comida", "Breakfast"),
        make_tx("2026-10-14", "expense", 500, "Transporte", "Bus"),
        make_tx("2026-10-14", "income", 6000, "Salario", "Freelance"),
        make_tx("2026-10-12", "expense", 300, "Comida", "Snack"),
        make_tx("2026-10-02", "income", 8000, "Salario", "Paycheck"),
        make_tx("2026-09-30", "expense", 1200, "Transporte", "Top-up"),
        make_tx("2025-11-02", "expense", 2000, "Comida", "Lunch"),
    )


def test_today_scenario():
    trans = make_sample()[:3]
    agg = aggregate(trans, Period.TODAY, NOW, initial_balance=25000)
    assert agg.period_income == 6000
    assert agg.period_expense == 2000
    assert agg.balance == 29000
    assert agg.category_breakdown == {"Comida": 1500, "Transporte": 500}
    assert agg.has_expenses


def test_balance_ignores_period():
    trans = make_sample()
    expected = 25000 + 6000 + 8000 - (1500 + 500 + 300 + 1200 + 2000)
    for period in Period:
        assert aggregate(trans, period, NOW, initial_balance=25000).balance == expected


def test_period_totals():
    trans = make_sample()
    week = aggregate(trans, Period.WEEK, NOW)
    assert week.period_income == 6000
    assert week.period_expense == 2300

    month = aggregate(trans, Period.MONTH, NOW)
    assert month.period_income == 14000
    assert month.period_expense == 2300

    year = aggregate(trans, Period.YEAR, NOW)
    assert year.period_expense == 3500

    everything = aggregate(trans, Period.ALL_TIME, NOW)
    assert everything.period_expense == 5500
    assert everything.period_income == 14000


def test_filtered_keeps_store_order():
    trans = make_sample()
    agg = aggregate(trans, Period.WEEK, NOW)
    assert [t.description for t in agg.filtered] == ["Breakfast", "Bus", "Freelance", "Snack"]


def test_breakdown_sums_per_category_in_first_seen_order():
    agg = aggregate(make_sample(), Period.ALL_TIME, NOW)
    assert list(agg.category_breakdown.items()) == [("Comida", 3800), ("Transporte", 1700)]


def test_no_expenses_gives_placeholder():
    trans = (make_tx("2026-10-14", "income", 6000, "Salario"),)
    agg = aggregate(trans, Period.TODAY, NOW, initial_balance=100)
    assert agg.category_breakdown == {NO_EXPENSES_LABEL: 1}
    assert agg.period_expense == 0
    assert not agg.has_expenses
    assert agg.balance == 6100


def test_empty_store():
    agg = aggregate((), Period.MONTH, NOW, initial_balance=25000)
    assert agg.balance == 25000
    assert agg.period_income == 0
    assert agg.filtered == ()
    assert agg.category_breakdown == {NO_EXPENSES_LABEL: 1}


def test_aggregate_is_repeatable():
    trans = make_sample()
    assert aggregate(trans, Period.MONTH, NOW, 10) == aggregate(trans, Period.MONTH, NOW, 10)


def test_aggregate_accepts_generator_input():
    trans = make_sample()
    agg = aggregate((t for t in trans), "all-time", NOW)
    assert len(agg.filtered) == len(trans)
    assert agg.balance == 14000 - 5500


def test_period_net():
    agg = aggregate(make_sample(), Period.WEEK, NOW)
    assert agg.period_net == 6000 - 2300


def test_iter_transactions_is_lazy():
    trans = make_sample()
    calls = {"n": 0}

    def pred(t):
        calls["n"] += 1
        return t.kind == "expense"

    first_two = list(islice(iter_transactions(trans, pred), 2))
    assert len(first_two) == 2
    assert calls["n"] < len(trans)


def test_predicates():
    trans = make_sample()
    assert len(list(filter(by_kind("income"), trans))) == 2
    assert len(list(filter(by_category("Comida"), trans))) == 3


def test_category_totals_ignore_income():
    trans = make_sample()
    assert "Salario" not in category_totals(trans)
    assert category_totals(()) == {}
    assert category_breakdown(()) == {NO_EXPENSES_LABEL: 1}


def test_transforms_helpers():
    trans = make_sample()
    assert total_amount(income_transactions(trans)) == 14000
    assert total_amount(expense_transactions(trans)) == 5500
    assert running_balance(trans, 1000) == 1000 + 14000 - 5500
    assert running_balance(()) == 0
