import math
from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence

from app.models.enums import TransactionType
from app.models.transaction import TransactionRecord
from app.schemas.summary import CategoryBreakdownEntry, MonthlyBucket, Totals

RECENT_TRANSACTIONS_LIMIT = 5


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_totals(transactions: Sequence[TransactionRecord]) -> Totals:
    total_income = 0.0
    total_expenses = 0.0

    for tx in transactions:
        if tx.direction == TransactionType.income:
            total_income += abs(tx.amount)
        elif tx.direction == TransactionType.expense:
            total_expenses += abs(tx.amount)

    return Totals(
        total_income=total_income,
        total_expenses=total_expenses,
        net_balance=total_income - total_expenses,
    )


def breakdown_by_category(
    transactions: Sequence[TransactionRecord],
) -> List[CategoryBreakdownEntry]:
    """
    Agrupa por nombre de categoría. Las transacciones cuya categoría no viene
    resuelta (solo el id) no participan.
    """
    amounts: Dict[str, float] = {}
    colors: Dict[str, str] = {}

    for tx in transactions:
        if tx.category is None:
            continue
        name = tx.category.name
        if name not in amounts:
            amounts[name] = 0.0
            colors[name] = tx.category.color
        amounts[name] += abs(tx.amount)

    grand_total = sum(amounts.values())

    entries = [
        CategoryBreakdownEntry(
            name=name,
            amount=amount,
            color=colors[name],
            percentage=_round_half_up(amount / grand_total * 100) if grand_total > 0 else 0,
        )
        for name, amount in amounts.items()
    ]
    # sorted() es estable: empates conservan el orden de aparición
    return sorted(entries, key=lambda entry: entry.amount, reverse=True)


def monthly_series(transactions: Sequence[TransactionRecord]) -> List[MonthlyBucket]:
    months = defaultdict(lambda: {"income": 0.0, "expenses": 0.0})

    for tx in transactions:
        if tx.occurred_on is None:
            continue
        bucket = months[tx.occurred_on.strftime("%Y-%m")]
        if tx.direction == TransactionType.income:
            bucket["income"] += abs(tx.amount)
        elif tx.direction == TransactionType.expense:
            bucket["expenses"] += abs(tx.amount)

    return [
        MonthlyBucket(
            month=month_key,
            income=values["income"],
            expenses=values["expenses"],
            net=values["income"] - values["expenses"],
        )
        for month_key, values in sorted(months.items())
    ]


def recent_transactions(
    transactions: Sequence[TransactionRecord],
    n: int = RECENT_TRANSACTIONS_LIMIT,
) -> List[TransactionRecord]:
    ordered = sorted(
        transactions,
        key=lambda tx: tx.occurred_on or date.min,
        reverse=True,
    )
    return ordered[:max(n, 0)]
