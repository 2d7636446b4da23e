from typing import Annotated

from fastapi import APIRouter, Depends

from finance_tracker.api.dependencies import get_aggregator, get_ledger
from finance_tracker.data.categories import get_categories
from finance_tracker.models import (
    Category,
    FinanceReport,
    FinanceStats,
    ProjectionPoint,
    ReportPeriod,
    SavingsAssistant,
    TransactionType,
)
from finance_tracker.services.ledger import Ledger
from finance_tracker.services.reports import build_report, savings_projection
from finance_tracker.services.stats import FinanceStatsAggregator

router = APIRouter(prefix="/api")


@router.get("/stats")
async def get_stats(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    aggregator: Annotated[FinanceStatsAggregator, Depends(get_aggregator)],
    period: ReportPeriod = "monthly",
) -> FinanceStats:
    return aggregator.get_stats(period, ledger.transactions, ledger.savings_goals)


@router.get("/savings-assistant")
async def get_savings_assistant(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    aggregator: Annotated[FinanceStatsAggregator, Depends(get_aggregator)],
) -> SavingsAssistant:
    return aggregator.get_savings_assistant(
        ledger.transactions,
        ledger.savings_goals,
        ledger.monthly_expenses,
    )


@router.get("/savings-assistant/projection")
async def get_savings_projection(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    aggregator: Annotated[FinanceStatsAggregator, Depends(get_aggregator)],
    months: int = 12,
) -> list[ProjectionPoint]:
    assistant = aggregator.get_savings_assistant(
        ledger.transactions,
        ledger.savings_goals,
        ledger.monthly_expenses,
    )
    return savings_projection(assistant, months)


@router.get("/reports")
async def get_report(
    ledger: Annotated[Ledger, Depends(get_ledger)],
    aggregator: Annotated[FinanceStatsAggregator, Depends(get_aggregator)],
    period: ReportPeriod = "monthly",
) -> FinanceReport:
    return build_report(aggregator, period, ledger.transactions, ledger.savings_goals)


@router.get("/categories")
async def list_categories(kind: TransactionType | None = None) -> list[Category]:
    return get_categories(kind)
