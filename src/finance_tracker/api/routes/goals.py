from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from finance_tracker.api.dependencies import get_ledger
from finance_tracker.api.schemas import DepositRequest
from finance_tracker.models import SavingsGoal, SavingsGoalDraft, SavingsGoalUpdate
from finance_tracker.services.ledger import Ledger

router = APIRouter(prefix="/api/goals")


@router.get("")
async def list_goals(ledger: Annotated[Ledger, Depends(get_ledger)]) -> list[dict[str, Any]]:
    return [
        {**goal.model_dump(mode="json"), "days_remaining": ledger.days_remaining(goal.id)}
        for goal in ledger.list_savings_goals()
    ]


@router.post("", status_code=201)
async def create_goal(
    draft: SavingsGoalDraft,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> SavingsGoal:
    return ledger.add_savings_goal(draft)


@router.patch("/{goal_id}")
async def update_goal(
    goal_id: str,
    update: SavingsGoalUpdate,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> SavingsGoal:
    try:
        goal = ledger.update_savings_goal(goal_id, update)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    if goal is None:
        raise HTTPException(status_code=404, detail="Savings goal not found")
    return goal


@router.post("/{goal_id}/deposit")
async def deposit(
    goal_id: str,
    req: DepositRequest,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> SavingsGoal:
    goal = ledger.add_money(goal_id, req.amount)
    if goal is None:
        raise HTTPException(status_code=404, detail="Savings goal not found")
    return goal


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(
    goal_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> None:
    if not ledger.delete_savings_goal(goal_id):
        raise HTTPException(status_code=404, detail="Savings goal not found")
