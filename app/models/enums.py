from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    income = "income"
    expense = "expense"

    @property
    def label(self) -> str:
        return "Income" if self is TransactionType.income else "Expense"

    def to_store(self) -> dict:
        return {"key": self.value, "value": self.label}


def parse_transaction_type(raw) -> Optional[TransactionType]:
    """Acepta "income", "Income" o el select del almacén {"key": ..., "value": ...}."""
    if isinstance(raw, dict):
        raw = raw.get("key") or raw.get("value")
    if not isinstance(raw, str):
        return None
    try:
        return TransactionType(raw.strip().lower())
    except ValueError:
        return None
