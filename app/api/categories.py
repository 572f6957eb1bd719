# app/api/categories.py

from fastapi import APIRouter, Depends

from app.core.errors import ValidationError
from app.core.security import get_current_user
from app.dependencies import get_store
from app.models.category import Category
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.store.client import StoreClient
from app.utils.store_helpers import get_owned_category, list_user_categories
from app.utils.validators import unique_slug

router = APIRouter(prefix="/categories", tags=["categories"])


@router.post("")
def create_category(
    category_data: CategoryCreate,
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    name = (category_data.name or "").strip()
    if not name or not category_data.color or not category_data.type:
        raise ValidationError("All fields are required")

    created = store.insert_one(
        "categories",
        title=name,
        slug=unique_slug(name, user_id),
        metadata={
            "user": user_id,
            "name": name,
            "color": category_data.color,
            "type": category_data.type.to_store(),
        },
    )
    return {"category": CategoryRead.from_category(Category.from_store(created))}


@router.get("")
def list_categories(
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    """Lista las categorías del usuario; sin resultados es una lista vacía."""
    categories = list_user_categories(store, user_id)
    return {"categories": [CategoryRead.from_category(c) for c in categories]}


@router.put("/{category_id}")
def update_category(
    category_id: str,
    category_data: CategoryUpdate,
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    """Actualiza solo los campos enviados."""
    get_owned_category(store, category_id, user_id)

    data: dict = {}
    metadata: dict = {}
    if category_data.name is not None:
        name = category_data.name.strip()
        if not name:
            raise ValidationError("Name cannot be empty")
        data["title"] = name
        metadata["name"] = name
    if category_data.color:
        metadata["color"] = category_data.color
    if category_data.type:
        metadata["type"] = category_data.type.to_store()

    if not data and not metadata:
        raise ValidationError("No fields to update")
    if metadata:
        data["metadata"] = metadata

    updated = store.update_one(category_id, data)
    return {"category": CategoryRead.from_category(Category.from_store(updated))}


@router.delete("/{category_id}")
def delete_category(
    category_id: str,
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    get_owned_category(store, category_id, user_id)
    store.delete_one(category_id)
    return {"success": True}
