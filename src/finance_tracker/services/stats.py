from collections.abc import Iterable, Sequence
from datetime import datetime

from finance_tracker.core import settings
from finance_tracker.domain.formatting import format_currency
from finance_tracker.domain.periods import days_in_month, month_start, period_start, week_start
from finance_tracker.logger import get_logger
from finance_tracker.models import (
    FinanceStats,
    MonthlyExpense,
    ReportPeriod,
    SavingsAssistant,
    SavingsGoal,
    Transaction,
)

logger = get_logger(__name__)


def sum_by_type(transactions: Iterable[Transaction]) -> tuple[float, float]:
    income = 0.0
    expenses = 0.0
    for transaction in transactions:
        if transaction.type == "income":
            income += transaction.amount
        else:
            expenses += transaction.amount
    return income, expenses


def sum_since(transactions: Iterable[Transaction], start: datetime) -> tuple[float, float]:
    return sum_by_type(t for t in transactions if t.date >= start)


def savings_rate(income: float, expenses: float) -> float:
    if income <= 0:
        return 0.0
    return (income - expenses) / income * 100


def total_savings(goals: Iterable[SavingsGoal]) -> float:
    return sum((goal.current_amount for goal in goals), 0.0)


def current_month_recurring_expenses(
    expenses: Iterable[MonthlyExpense],
    now: datetime | None = None,
) -> float:
    """
    Recurring expenses already charged this month.

    An active expense counts from its billing day to the end of the month.
    """
    now = now or datetime.now()
    return sum(
        (expense.amount for expense in expenses if expense.is_active and expense.day_of_month <= now.day),
        0.0,
    )


class FinanceStatsAggregator:
    def __init__(
        self,
        monthly_goal: float | None = None,
        low_savings_threshold: float | None = None,
        low_daily_budget_threshold: float | None = None,
    ):
        self.monthly_goal = (
            monthly_goal if monthly_goal is not None else settings.get_monthly_savings_goal()
        )
        self.low_savings_threshold = (
            low_savings_threshold
            if low_savings_threshold is not None
            else settings.get_low_savings_threshold()
        )
        self.low_daily_budget_threshold = (
            low_daily_budget_threshold
            if low_daily_budget_threshold is not None
            else settings.get_low_daily_budget_threshold()
        )

    def get_stats(
        self,
        period: ReportPeriod,
        transactions: Sequence[Transaction],
        goals: Sequence[SavingsGoal] = (),
        now: datetime | None = None,
    ) -> FinanceStats:
        now = now or datetime.now()

        period_income, period_expenses = sum_since(transactions, period_start(period, now))
        monthly_income, monthly_expenses = sum_since(transactions, month_start(now))
        weekly_income, weekly_expenses = sum_since(transactions, week_start(now))
        all_time_income, all_time_expenses = sum_by_type(transactions)

        return FinanceStats(
            period=period,
            total_income=period_income,
            total_expenses=period_expenses,
            all_time_income=all_time_income,
            all_time_expenses=all_time_expenses,
            balance=all_time_income - all_time_expenses,
            monthly_income=monthly_income,
            monthly_expenses=monthly_expenses,
            weekly_income=weekly_income,
            weekly_expenses=weekly_expenses,
            savings_rate=savings_rate(monthly_income, monthly_expenses),
            total_savings=total_savings(goals),
        )

    def get_savings_assistant(
        self,
        transactions: Sequence[Transaction],
        goals: Sequence[SavingsGoal] = (),
        monthly_expenses: Sequence[MonthlyExpense] = (),
        now: datetime | None = None,
    ) -> SavingsAssistant:
        now = now or datetime.now()
        stats = self.get_stats("monthly", transactions, goals, now)

        income = stats.monthly_income
        expenses = stats.monthly_expenses + current_month_recurring_expenses(monthly_expenses, now)
        projected = income - expenses
        daily_budget = max(0.0, projected / days_in_month(now))

        recommendations, alerts = self._advice(projected, daily_budget)

        logger.debug(
            "[STATS] Assistant: income=%.2f expenses=%.2f projected=%.2f daily=%.2f alerts=%d",
            income,
            expenses,
            projected,
            daily_budget,
            len(alerts),
        )

        return SavingsAssistant(
            monthly_goal=self.monthly_goal,
            current_savings=stats.total_savings,
            projected_savings=projected,
            recommendations=recommendations,
            alerts=alerts,
            spending_limit=max(0.0, income - self.monthly_goal),
            daily_budget=daily_budget,
        )

    def _advice(self, projected: float, daily_budget: float) -> tuple[list[str], list[str]]:
        recommendations: list[str] = []
        alerts: list[str] = []

        if projected < 0:
            alerts.append(
                f"Estás gastando más de lo que ingresas este mes ({format_currency(-projected)} de déficit)."
            )
            recommendations.append("Revisa tus gastos variables y recorta los que no sean esenciales.")
            recommendations.append("Pausa o cancela suscripciones y gastos mensuales que no uses.")
        elif projected < self.low_savings_threshold:
            alerts.append(
                f"Tu ahorro proyectado este mes es bajo ({format_currency(projected)})."
            )
            recommendations.append(
                f"Intenta reducir tus gastos para ahorrar al menos {format_currency(self.low_savings_threshold)} al mes."
            )
            recommendations.append("Fija un presupuesto semanal para comida y ocio.")
        else:
            recommendations.append(
                f"¡Buen trabajo! Vas a ahorrar {format_currency(projected)} este mes."
            )
            recommendations.append("Aprovecha para aportar a tus objetivos de ahorro o crear un fondo de emergencia.")

        if daily_budget < self.low_daily_budget_threshold:
            alerts.append(
                f"Tu presupuesto diario es de solo {format_currency(daily_budget)}."
            )

        return recommendations, alerts
