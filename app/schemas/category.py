from typing import Optional

from pydantic import BaseModel

from app.models.category import Category
from app.models.enums import TransactionType


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None
    type: Optional[TransactionType] = None


class CategoryUpdate(CategoryCreate):
    pass


class CategoryRead(BaseModel):
    id: Optional[str] = None
    name: str
    color: str
    type: Optional[TransactionType] = None

    @classmethod
    def from_category(cls, category: Category) -> "CategoryRead":
        return cls(
            id=category.id,
            name=category.name,
            color=category.color,
            type=category.type,
        )
