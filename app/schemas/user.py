from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import User


class UserCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(default=None, alias="confirmPassword")


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    full_name: Optional[str] = None
    dark_mode: Optional[bool] = None


class UserRead(BaseModel):
    id: str
    email: str
    full_name: str
    dark_mode: bool = False

    @classmethod
    def from_user(cls, user: User) -> "UserRead":
        # Nunca exponemos password_hash
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            dark_mode=user.dark_mode,
        )


class AuthResponse(BaseModel):
    user: UserRead
    token: str
