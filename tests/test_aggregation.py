from datetime import date

from app.models.category import Category
from app.models.enums import TransactionType
from app.models.transaction import TransactionRecord
from app.utils.aggregation import (
    breakdown_by_category,
    compute_totals,
    monthly_series,
    recent_transactions,
)

FOOD = Category(id="c1", name="Food", color="#ff0000")
RENT = Category(id="c2", name="Rent", color="#00ff00")


def tx(
    id: str,
    amount: float,
    direction: TransactionType | None = TransactionType.expense,
    occurred_on: date | None = date(2024, 1, 1),
    category: Category | None = None,
) -> TransactionRecord:
    return TransactionRecord(
        id=id,
        amount=amount,
        direction=direction,
        occurred_on=occurred_on,
        category=category,
        category_id=category.id if category else None,
    )


def test_compute_totals_empty() -> None:
    totals = compute_totals([])
    assert (totals.total_income, totals.total_expenses, totals.net_balance) == (0, 0, 0)


def test_compute_totals_income_and_expense() -> None:
    totals = compute_totals([
        tx("1", 100, TransactionType.income),
        tx("2", 40, TransactionType.expense),
    ])
    assert totals.total_income == 100
    assert totals.total_expenses == 40
    assert totals.net_balance == 60


def test_compute_totals_uses_absolute_amounts_and_ignores_unknown_direction() -> None:
    totals = compute_totals([
        tx("1", -25, TransactionType.expense),
        tx("2", 10, None),
    ])
    assert totals.total_expenses == 25
    assert totals.total_income == 0
    assert totals.net_balance == -25


def test_breakdown_same_category_sums() -> None:
    entries = breakdown_by_category([tx("1", 30, category=FOOD), tx("2", 70, category=FOOD)])

    assert len(entries) == 1
    assert entries[0].name == "Food"
    assert entries[0].amount == 100
    assert entries[0].percentage == 100
    assert entries[0].color == "#ff0000"


def test_breakdown_orders_by_amount_and_skips_unresolved() -> None:
    unresolved = TransactionRecord(id="3", amount=500, direction=TransactionType.expense, category_id="c9")
    entries = breakdown_by_category([
        tx("1", 25, category=FOOD),
        tx("2", 75, category=RENT),
        unresolved,
    ])

    assert [e.name for e in entries] == ["Rent", "Food"]
    assert [e.percentage for e in entries] == [75, 25]


def test_breakdown_ties_keep_first_seen_order() -> None:
    entries = breakdown_by_category([tx("1", 50, category=RENT), tx("2", 50, category=FOOD)])
    assert [e.name for e in entries] == ["Rent", "Food"]


def test_breakdown_rounds_half_up() -> None:
    other = Category(name="Other", color="#000")
    # 1/8 = 12.5% -> 13, 7/8 = 87.5% -> 88
    entries = breakdown_by_category([tx("1", 1, category=other), tx("2", 7, category=FOOD)])
    assert [e.percentage for e in entries] == [88, 13]


def test_breakdown_with_zero_total() -> None:
    entries = breakdown_by_category([tx("1", 0, category=FOOD)])
    assert entries[0].percentage == 0


def test_monthly_series_groups_and_orders() -> None:
    buckets = monthly_series([
        tx("2", 20, TransactionType.expense, occurred_on=date(2024, 2, 1)),
        tx("1", 50, TransactionType.income, occurred_on=date(2024, 1, 15)),
    ])

    assert [b.model_dump() for b in buckets] == [
        {"month": "2024-01", "income": 50, "expenses": 0, "net": 50},
        {"month": "2024-02", "income": 0, "expenses": 20, "net": -20},
    ]


def test_monthly_series_skips_undated() -> None:
    assert monthly_series([tx("1", 10, occurred_on=None)]) == []


def test_recent_transactions_newest_first() -> None:
    records = [tx(str(day), 1, occurred_on=date(2024, 3, day)) for day in (3, 7, 1, 5, 2, 6, 4)]
    recent = recent_transactions(records, 5)

    assert len(recent) == 5
    assert [r.occurred_on.day for r in recent] == [7, 6, 5, 4, 3]


def test_recent_transactions_does_not_mutate_input() -> None:
    records = [tx("a", 1, occurred_on=date(2024, 1, 1)), tx("b", 1, occurred_on=date(2024, 2, 1))]
    recent_transactions(records)
    assert [r.id for r in records] == ["a", "b"]


def test_record_from_store_is_tolerant() -> None:
    record = TransactionRecord.from_store({
        "id": "t1",
        "metadata": {"amount": "not a number", "date": "31/12/2024", "type": {"key": "other"}, "category": "c1"},
    })

    assert record.amount == 0
    assert record.occurred_on is None
    assert record.direction is None
    assert record.category is None
    assert record.category_id == "c1"


def test_record_from_store_with_resolved_category() -> None:
    record = TransactionRecord.from_store({
        "id": "t1",
        "title": "Lunch",
        "metadata": {
            "amount": 12.5,
            "date": "2024-05-02",
            "type": {"key": "expense", "value": "Expense"},
            "category": {"id": "c1", "metadata": {"name": "Food", "color": "#123456"}},
        },
    })

    assert record.direction == TransactionType.expense
    assert record.occurred_on == date(2024, 5, 2)
    assert record.category.name == "Food"
    assert record.category_id == "c1"


def test_record_from_store_treats_non_finite_amounts_as_zero() -> None:
    for raw in ("Infinity", "-Infinity", "NaN", "1e400", float("inf"), float("nan"), 10**400):
        record = TransactionRecord.from_store({"id": "t1", "metadata": {"amount": raw}})
        assert record.amount == 0, raw


def test_aggregation_ignores_non_finite_stored_amounts() -> None:
    records = [
        TransactionRecord.from_store({
            "id": id,
            "metadata": {
                "amount": amount,
                "date": "2024-03-10",
                "type": {"key": "expense", "value": "Expense"},
                "category": {"id": "c1", "metadata": {"name": "Food", "color": "#123456"}},
            },
        })
        for id, amount in (("t1", "Infinity"), ("t2", "NaN"), ("t3", 30))
    ]

    totals = compute_totals(records)
    assert (totals.total_income, totals.total_expenses, totals.net_balance) == (0, 30, -30)

    breakdown = breakdown_by_category(records)
    assert [(e.name, e.amount, e.percentage) for e in breakdown] == [("Food", 30, 100)]

    series = monthly_series(records)
    assert [(b.month, b.expenses) for b in series] == [("2024-03", 30)]
