# app/api/dashboard.py

from fastapi import APIRouter, Depends

from app.core.security import get_current_user
from app.dependencies import get_store
from app.models.enums import TransactionType
from app.models.transaction import TransactionRecord
from app.schemas.summary import DashboardRead
from app.schemas.transaction import TransactionRead
from app.store.client import StoreClient
from app.utils.aggregation import (
    breakdown_by_category,
    compute_totals,
    monthly_series,
    recent_transactions,
)
from app.utils.store_helpers import list_user_transactions

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def build_dashboard(transactions: list[TransactionRecord]) -> DashboardRead:
    totals = compute_totals(transactions)
    # El desglose por categoría solo considera gastos
    expenses = [tx for tx in transactions if tx.direction == TransactionType.expense]

    return DashboardRead(
        **totals.model_dump(),
        recent_transactions=[TransactionRead.from_record(tx) for tx in recent_transactions(transactions)],
        category_breakdown=breakdown_by_category(expenses),
        monthly_data=monthly_series(transactions),
    )


@router.get("")
def financial_summary(
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    transactions = list_user_transactions(store, user_id)
    return {"dashboard": build_dashboard(transactions)}
