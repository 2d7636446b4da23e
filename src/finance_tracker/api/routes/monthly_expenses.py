from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from finance_tracker.api.dependencies import get_ledger
from finance_tracker.api.schemas import CurrentMonthExpenses
from finance_tracker.models import MonthlyExpense, MonthlyExpenseDraft, MonthlyExpenseUpdate
from finance_tracker.services.ledger import Ledger

router = APIRouter(prefix="/api/monthly-expenses")


@router.get("")
async def list_monthly_expenses(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    active_only: bool = False,
) -> list[MonthlyExpense]:
    return ledger.list_monthly_expenses(active_only=active_only)


@router.get("/current-month")
async def current_month(ledger: Annotated[Ledger, Depends(get_ledger)]) -> CurrentMonthExpenses:
    return CurrentMonthExpenses(
        total=ledger.current_month_expenses(),
        active_count=len(ledger.list_monthly_expenses(active_only=True)),
    )


@router.post("", status_code=201)
async def create_monthly_expense(
    draft: MonthlyExpenseDraft,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> MonthlyExpense:
    return ledger.add_monthly_expense(draft)


@router.patch("/{expense_id}")
async def update_monthly_expense(
    expense_id: str,
    update: MonthlyExpenseUpdate,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> MonthlyExpense:
    try:
        expense = ledger.update_monthly_expense(expense_id, update)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc
    if expense is None:
        raise HTTPException(status_code=404, detail="Monthly expense not found")
    return expense


@router.post("/{expense_id}/toggle")
async def toggle_monthly_expense(
    expense_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> MonthlyExpense:
    expense = ledger.toggle_monthly_expense(expense_id)
    if expense is None:
        raise HTTPException(status_code=404, detail="Monthly expense not found")
    return expense


@router.delete("/{expense_id}", status_code=204)
async def delete_monthly_expense(
    expense_id: str,
    ledger: Annotated[Ledger, Depends(get_ledger)],
) -> None:
    if not ledger.delete_monthly_expense(expense_id):
        raise HTTPException(status_code=404, detail="Monthly expense not found")
