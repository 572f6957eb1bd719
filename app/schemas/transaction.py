import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from app.models.enums import TransactionType
from app.models.transaction import TransactionRecord
from app.schemas.category import CategoryRead


class TransactionCreate(BaseModel):
    type: Optional[TransactionType] = None
    amount: Optional[float] = Field(default=None, allow_inf_nan=False)
    category: Optional[str] = None  # id de la categoría
    description: Optional[str] = None
    date: Optional[dt.date] = None


class TransactionUpdate(TransactionCreate):
    title: Optional[str] = None


class TransactionRead(BaseModel):
    id: str
    title: str
    type: Optional[TransactionType] = None
    amount: float
    date: Optional[dt.date] = None
    description: Optional[str] = None
    category_id: Optional[str] = None
    category: Optional[CategoryRead] = None

    @classmethod
    def from_record(cls, record: TransactionRecord) -> "TransactionRead":
        return cls(
            id=record.id,
            title=record.title,
            type=record.direction,
            amount=record.amount,
            date=record.occurred_on,
            description=record.description,
            category_id=record.category_id,
            category=CategoryRead.from_category(record.category) if record.category else None,
        )
