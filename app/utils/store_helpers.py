from typing import Any, Dict, List, Optional

from app.core.errors import NotFoundError, ValidationError
from app.models.category import Category, reference_id
from app.models.transaction import TransactionRecord
from app.models.user import User
from app.store.client import StoreClient

USER_PROPS = ["id", "title", "metadata"]
OBJECT_PROPS = ["id", "title", "slug", "metadata"]

OBJECT_LABELS = {
    "categories": "Category",
    "transactions": "Transaction",
}


def find_user_by_email(store: StoreClient, email: str) -> Optional[User]:
    obj = store.find_one("users", {"metadata.email": email}, props=USER_PROPS)
    return User.from_store(obj) if obj else None


def get_user(store: StoreClient, user_id: str) -> User:
    obj = store.get_one(user_id, props=USER_PROPS + ["type"])
    if not obj or obj.get("type", "users") != "users":
        raise NotFoundError("User not found")
    return User.from_store(obj)


def get_owned_object(
    store: StoreClient,
    object_type: str,
    object_id: str,
    user_id: str,
    depth: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Devuelve el objeto si existe, es del tipo esperado y pertenece al usuario.
    Los objetos de otros usuarios se reportan como inexistentes.
    """
    obj = store.get_one(object_id, props=OBJECT_PROPS + ["type"], depth=depth)
    if (
        not obj
        or obj.get("type", object_type) != object_type
        or reference_id((obj.get("metadata") or {}).get("user")) != user_id
    ):
        raise NotFoundError(f"{OBJECT_LABELS.get(object_type, 'Object')} not found")
    return obj


def get_owned_category(store: StoreClient, category_id: str, user_id: str) -> Category:
    return Category.from_store(get_owned_object(store, "categories", category_id, user_id))


def ensure_category_for_transaction(store: StoreClient, category_id: str, user_id: str) -> Category:
    """Como get_owned_category, pero una categoría ajena es un error de entrada (400)."""
    try:
        return get_owned_category(store, category_id, user_id)
    except NotFoundError:
        raise ValidationError("Invalid category")


def list_user_categories(store: StoreClient, user_id: str) -> List[Category]:
    objects = store.find("categories", {"metadata.user": user_id}, props=OBJECT_PROPS)
    return [Category.from_store(obj) for obj in objects]


def list_user_transactions(store: StoreClient, user_id: str) -> List[TransactionRecord]:
    # depth=1 para que la categoría llegue resuelta
    objects = store.find(
        "transactions",
        {"metadata.user": user_id},
        props=OBJECT_PROPS,
        depth=1,
    )
    return [TransactionRecord.from_store(obj) for obj in objects]
