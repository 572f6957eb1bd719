from typing import Any, Dict, Optional

from pydantic import BaseModel


class User(BaseModel):
    id: str
    email: str
    full_name: str = ""
    password_hash: Optional[str] = None
    dark_mode: bool = False
    created_at: Optional[str] = None

    @classmethod
    def from_store(cls, obj: Dict[str, Any]) -> "User":
        metadata = obj.get("metadata") or {}
        return cls(
            id=obj["id"],
            email=metadata.get("email", ""),
            full_name=metadata.get("full_name") or obj.get("title") or "",
            password_hash=metadata.get("password_hash"),
            dark_mode=bool(metadata.get("dark_mode") or False),
            created_at=metadata.get("created_at"),
        )
