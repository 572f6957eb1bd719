from fastapi import APIRouter, Depends

from app.core.errors import ValidationError
from app.core.security import get_current_user
from app.dependencies import get_store
from app.models.user import User
from app.schemas.user import UserRead, UserUpdate
from app.store.client import StoreClient
from app.utils.store_helpers import get_user

router = APIRouter(prefix="/user", tags=["user"])


@router.get("")
def read_current_user(
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    """Perfil del usuario del token; siempre se relee del almacén."""
    user = get_user(store, user_id)
    return {"user": UserRead.from_user(user)}


@router.put("")
def update_current_user(
    user_update: UserUpdate,
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    get_user(store, user_id)

    data: dict = {}
    metadata: dict = {}
    if user_update.full_name is not None:
        full_name = user_update.full_name.strip()
        if len(full_name) < 2:
            raise ValidationError("Full name must be at least 2 characters long")
        data["title"] = full_name
        metadata["full_name"] = full_name
    if user_update.dark_mode is not None:
        metadata["dark_mode"] = user_update.dark_mode

    if not data and not metadata:
        raise ValidationError("No fields to update")
    if metadata:
        data["metadata"] = metadata

    updated = store.update_one(user_id, data)
    return {"user": UserRead.from_user(User.from_store(updated))}
