from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from finance_tracker.api.dependencies import get_ledger
from finance_tracker.models import Card, CardDraft
from finance_tracker.services.ledger import Ledger

router = APIRouter(prefix="/api/cards")


@router.get("")
async def list_cards(ledger: Annotated[Ledger, Depends(get_ledger)]) -> list[Card]:
    return ledger.list_cards()


@router.post("", status_code=201)
async def create_card(
    draft: CardDraft,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> Card:
    return ledger.add_card(draft)


@router.delete("/{card_id}", status_code=204)
async def delete_card(
    card_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> None:
    if not ledger.delete_card(card_id):
        raise HTTPException(status_code=404, detail="Card not found")
