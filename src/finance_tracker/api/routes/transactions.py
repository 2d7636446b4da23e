from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException

from finance_tracker.api.dependencies import get_ledger
from finance_tracker.data.categories import category_name
from finance_tracker.models import Transaction, TransactionDraft
from finance_tracker.services.ledger import Ledger

router = APIRouter(prefix="/api/transactions")


@router.get("")
async def list_transactions(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    limit: int | None = None,
) -> list[dict[str, Any]]:
    return [
        {
            **transaction.model_dump(mode="json"),
            "category_name": category_name(transaction.category),
            "card_name": ledger.card_label(transaction.card_id) if transaction.card_id else None,
        }
        for transaction in ledger.list_transactions(limit)
    ]


@router.post("", status_code=201)
async def create_transaction(
    draft: TransactionDraft,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> Transaction:
    return ledger.add_transaction(draft)


@router.delete("/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> None:
    if not ledger.delete_transaction(transaction_id):
        raise HTTPException(status_code=404, detail="Transaction not found")
