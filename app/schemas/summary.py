# app/schemas/summary.py

from pydantic import BaseModel
from typing import List

from app.schemas.transaction import TransactionRead


class Totals(BaseModel):
    total_income: float = 0.0
    total_expenses: float = 0.0
    net_balance: float = 0.0


class CategoryBreakdownEntry(BaseModel):
    name: str
    amount: float
    color: str
    percentage: int


class MonthlyBucket(BaseModel):
    month: str  # "YYYY-MM"
    income: float
    expenses: float
    net: float


class DashboardRead(Totals):
    recent_transactions: List[TransactionRead]
    category_breakdown: List[CategoryBreakdownEntry]
    monthly_data: List[MonthlyBucket]
