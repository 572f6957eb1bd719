from typing import Any, Dict, Optional

from pydantic import BaseModel

from app.models.enums import TransactionType, parse_transaction_type

DEFAULT_CATEGORY_COLOR = "#999999"


def reference_id(value: Any) -> Optional[str]:
    """Id de una relación, venga como objeto resuelto o como id suelto."""
    if isinstance(value, dict):
        return value.get("id")
    if isinstance(value, str) and value:
        return value
    return None


def is_resolved(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("metadata"), dict)


class Category(BaseModel):
    id: Optional[str] = None
    name: str
    color: str = DEFAULT_CATEGORY_COLOR
    type: Optional[TransactionType] = None
    user_id: Optional[str] = None

    @classmethod
    def from_store(cls, obj: Dict[str, Any]) -> "Category":
        metadata = obj.get("metadata") or {}
        return cls(
            id=obj.get("id"),
            name=metadata.get("name") or obj.get("title") or "Unknown Category",
            color=metadata.get("color") or DEFAULT_CATEGORY_COLOR,
            type=parse_transaction_type(metadata.get("type")),
            user_id=reference_id(metadata.get("user")),
        )
