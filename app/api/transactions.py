from fastapi import APIRouter, Depends

from app.core.errors import ValidationError
from app.core.security import get_current_user
from app.dependencies import get_store
from app.models.transaction import TransactionRecord
from app.schemas.transaction import TransactionCreate, TransactionRead, TransactionUpdate
from app.store.client import StoreClient
from app.utils.store_helpers import (
    ensure_category_for_transaction,
    get_owned_object,
    list_user_transactions,
)
from app.utils.validators import unique_slug

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.post("")
def create_transaction(
    transaction_data: TransactionCreate,
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    if (
        not transaction_data.type
        or not transaction_data.amount
        or not transaction_data.category
        or not transaction_data.date
    ):
        raise ValidationError("All required fields must be provided")

    ensure_category_for_transaction(store, transaction_data.category, user_id)

    tx_type = transaction_data.type
    created = store.insert_one(
        "transactions",
        title=transaction_data.description or f"{tx_type.value} transaction",
        slug=unique_slug(tx_type.value, user_id),
        metadata={
            "user": user_id,
            "type": tx_type.to_store(),
            "amount": float(transaction_data.amount),
            "category": transaction_data.category,
            "description": transaction_data.description,
            "date": transaction_data.date.isoformat(),
        },
    )
    return {"transaction": TransactionRead.from_record(TransactionRecord.from_store(created))}


@router.get("")
def list_transactions(
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    records = list_user_transactions(store, user_id)
    return {"transactions": [TransactionRead.from_record(r) for r in records]}


@router.put("/{transaction_id}")
def update_transaction(
    transaction_id: str,
    transaction_data: TransactionUpdate,
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    get_owned_object(store, "transactions", transaction_id, user_id)

    data: dict = {}
    metadata: dict = {}
    if transaction_data.title:
        data["title"] = transaction_data.title
    if transaction_data.type:
        metadata["type"] = transaction_data.type.to_store()
    if transaction_data.amount is not None:
        if transaction_data.amount == 0:
            raise ValidationError("Amount must be non-zero")
        metadata["amount"] = float(transaction_data.amount)
    if transaction_data.category:
        ensure_category_for_transaction(store, transaction_data.category, user_id)
        metadata["category"] = transaction_data.category
    if transaction_data.description is not None:
        metadata["description"] = transaction_data.description
    if transaction_data.date:
        metadata["date"] = transaction_data.date.isoformat()

    if not data and not metadata:
        raise ValidationError("No fields to update")
    if metadata:
        data["metadata"] = metadata

    updated = store.update_one(transaction_id, data)
    return {"transaction": TransactionRead.from_record(TransactionRecord.from_store(updated))}


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: str,
    user_id: str = Depends(get_current_user),
    store: StoreClient = Depends(get_store),
):
    get_owned_object(store, "transactions", transaction_id, user_id)
    store.delete_one(transaction_id)
    return {"success": True}
