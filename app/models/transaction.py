import math
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel

from app.models.category import Category, is_resolved, reference_id
from app.models.enums import TransactionType, parse_transaction_type


def safe_parse_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        result = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    # "Infinity", "NaN" o "1e400" también cuentan como importe inválido
    if not math.isfinite(result):
        return 0.0
    return result


def safe_parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


class TransactionRecord(BaseModel):
    """
    Transacción tal como la ve la agregación. Los campos ausentes o mal
    formados quedan en cero / None en lugar de fallar.
    """

    id: str
    title: str = ""
    occurred_on: Optional[date] = None
    amount: float = 0.0
    direction: Optional[TransactionType] = None
    # Solo se rellena cuando el almacén devolvió la categoría resuelta (depth=1)
    category: Optional[Category] = None
    category_id: Optional[str] = None
    description: Optional[str] = None
    user_id: Optional[str] = None

    @classmethod
    def from_store(cls, obj: Dict[str, Any]) -> "TransactionRecord":
        metadata = obj.get("metadata") or {}
        raw_category = metadata.get("category")
        return cls(
            id=str(obj.get("id", "")),
            title=obj.get("title") or "",
            occurred_on=safe_parse_date(metadata.get("date")),
            amount=safe_parse_float(metadata.get("amount")),
            direction=parse_transaction_type(metadata.get("type")),
            category=Category.from_store(raw_category) if is_resolved(raw_category) else None,
            category_id=reference_id(raw_category),
            description=metadata.get("description"),
            user_id=reference_id(metadata.get("user")),
        )
