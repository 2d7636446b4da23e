"""Report views derived from the ledger: breakdowns, trends and projections."""

from collections import defaultdict
from collections.abc import Sequence
from datetime import date, datetime, timedelta

from finance_tracker.data.categories import category_name
from finance_tracker.domain.periods import month_key, period_start, start_of_day
from finance_tracker.models import (
    BalancePoint,
    CategoryBreakdownRow,
    FinanceReport,
    IncomeBreakdown,
    MonthlyTrendPoint,
    ProjectionPoint,
    ReportPeriod,
    SavingsAssistant,
    SavingsGoal,
    Transaction,
)
from finance_tracker.services.stats import FinanceStatsAggregator


def category_breakdown(
    period: ReportPeriod,
    transactions: Sequence[Transaction],
    now: datetime | None = None,
) -> list[CategoryBreakdownRow]:
    """Expense totals per category within ``period``, largest first."""
    now = now or datetime.now()
    start = period_start(period, now)
    totals: dict[str, float] = defaultdict(float)
    for transaction in transactions:
        if transaction.type == "expense" and transaction.date >= start:
            totals[transaction.category] += transaction.amount

    grand_total = sum(totals.values())
    rows = [
        CategoryBreakdownRow(
            category_id=category_id,
            category=category_name(category_id),
            amount=amount,
            percentage=amount / grand_total * 100 if grand_total > 0 else 0.0,
        )
        for category_id, amount in totals.items()
    ]
    rows.sort(key=lambda row: row.amount, reverse=True)
    return rows


def monthly_trend(transactions: Sequence[Transaction], months: int = 6) -> list[MonthlyTrendPoint]:
    """Income and expenses per calendar month, for the latest ``months`` with activity."""
    buckets: dict[str, list[float]] = defaultdict(lambda: [0.0, 0.0])
    for transaction in transactions:
        bucket = buckets[month_key(transaction.date)]
        if transaction.type == "income":
            bucket[0] += transaction.amount
        else:
            bucket[1] += transaction.amount

    latest = sorted(buckets.items())[-months:] if months > 0 else []
    return [
        MonthlyTrendPoint(month=key, income=income, expenses=expenses)
        for key, (income, expenses) in latest
    ]


def balance_history(
    transactions: Sequence[Transaction],
    days: int = 30,
    now: datetime | None = None,
) -> list[BalancePoint]:
    """Running balance over the last ``days`` days, starting from zero."""
    now = now or datetime.now()
    today = start_of_day(now).date()
    per_day: dict[date, list[float]] = defaultdict(lambda: [0.0, 0.0])
    for transaction in transactions:
        bucket = per_day[transaction.date.date()]
        if transaction.type == "income":
            bucket[0] += transaction.amount
        else:
            bucket[1] += transaction.amount

    points = []
    running = 0.0
    for offset in range(days - 1, -1, -1):
        day = today - timedelta(days=offset)
        income, expenses = per_day.get(day, (0.0, 0.0))
        running += income - expenses
        points.append(BalancePoint(day=day, balance=running, income=income, expenses=expenses))
    return points


def monthly_income_breakdown(
    transactions: Sequence[Transaction],
    now: datetime | None = None,
) -> IncomeBreakdown:
    """Gross and net income of the current calendar month; the gap is taxes."""
    now = now or datetime.now()
    gross = 0.0
    net = 0.0
    for transaction in transactions:
        if transaction.type != "income":
            continue
        if (transaction.date.year, transaction.date.month) != (now.year, now.month):
            continue
        gross += transaction.gross_amount or transaction.amount
        net += transaction.amount
    return IncomeBreakdown(gross=gross, net=net, taxes=gross - net)


def goals_progress(goals: Sequence[SavingsGoal]) -> float:
    target = sum((goal.target_amount for goal in goals), 0.0)
    current = sum((goal.current_amount for goal in goals), 0.0)
    if target <= 0:
        return 0.0
    return current / target * 100


def savings_projection(assistant: SavingsAssistant, months: int = 12) -> list[ProjectionPoint]:
    return [
        ProjectionPoint(
            month=month,
            savings=assistant.current_savings + assistant.projected_savings * month,
            goal=assistant.monthly_goal * month,
        )
        for month in range(months + 1)
    ]


def build_report(
    aggregator: FinanceStatsAggregator,
    period: ReportPeriod,
    transactions: Sequence[Transaction],
    goals: Sequence[SavingsGoal] = (),
    now: datetime | None = None,
) -> FinanceReport:
    now = now or datetime.now()
    return FinanceReport(
        period=period,
        stats=aggregator.get_stats(period, transactions, goals, now),
        category_breakdown=category_breakdown(period, transactions, now),
        monthly_trend=monthly_trend(transactions),
        balance_history=balance_history(transactions, now=now),
        monthly_income_breakdown=monthly_income_breakdown(transactions, now),
        goals_progress=goals_progress(goals),
    )
