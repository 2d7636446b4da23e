from datetime import datetime

import pytest

from factories import NOW, make_goal, make_transaction
from finance_tracker.models import MonthlyExpense
from finance_tracker.services.stats import FinanceStatsAggregator, current_month_recurring_expenses


@pytest.fixture
def aggregator():
    return FinanceStatsAggregator(monthly_goal=500, low_savings_threshold=200, low_daily_budget_threshold=20)


def month(income, expenses):
    return [
        make_transaction(income, "income", datetime(2026, 3, 1, 9, 0), "salary"),
        make_transaction(expenses, "expense", datetime(2026, 3, 2, 9, 0)),
    ]


def recurring(amount, day, active=True, expense_id="m1"):
    return MonthlyExpense(
        id=expense_id,
        name="Netflix",
        amount=amount,
        category="entertainment",
        day_of_month=day,
        is_active=active,
    )


def test_deficit(aggregator):
    assistant = aggregator.get_savings_assistant(month(1000, 1500), now=NOW)
    assert assistant.projected_savings == -500
    assert assistant.daily_budget == 0
    assert len(assistant.alerts) == 2
    assert assistant.alerts[0].startswith("Estás gastando más")
    assert "Tu presupuesto diario es de solo" in assistant.alerts[1]
    assert len(assistant.recommendations) == 2
    assert assistant.spending_limit == 500


def test_low_savings(aggregator):
    assistant = aggregator.get_savings_assistant(month(1000, 900), now=NOW)
    assert assistant.projected_savings == 100
    assert assistant.alerts[0].startswith("Tu ahorro proyectado este mes es bajo")
    # 100 / 31 days is under the daily threshold too.
    assert len(assistant.alerts) == 2
    assert len(assistant.recommendations) == 2


def test_healthy_month(aggregator):
    assistant = aggregator.get_savings_assistant(month(3000, 1000), now=NOW)
    assert assistant.projected_savings == 2000
    assert assistant.daily_budget == pytest.approx(2000 / 31)
    assert assistant.alerts == []
    assert assistant.recommendations[0].startswith("¡Buen trabajo!")
    assert assistant.spending_limit == 2500
    assert assistant.monthly_goal == 500


def test_healthy_month_with_low_daily_budget(aggregator):
    assistant = aggregator.get_savings_assistant(month(1250, 1000), now=NOW)
    assert assistant.projected_savings == 250
    assert assistant.recommendations[0].startswith("¡Buen trabajo!")
    assert len(assistant.alerts) == 1
    assert assistant.alerts[0].startswith("Tu presupuesto diario es de solo")


def test_recurring_expenses_count_from_their_day(aggregator):
    expenses = [
        recurring(100, 5, expense_id="a"),
        recurring(40, 10, expense_id="b"),
        recurring(60, 15, expense_id="c"),
        recurring(80, 1, active=False, expense_id="d"),
    ]
    assert current_month_recurring_expenses(expenses, NOW) == 140

    assistant = aggregator.get_savings_assistant(month(3000, 1000), monthly_expenses=expenses, now=NOW)
    assert assistant.projected_savings == 1860


def test_no_income(aggregator):
    assistant = aggregator.get_savings_assistant([], now=NOW)
    assert assistant.spending_limit == 0
    assert assistant.projected_savings == 0
    assert assistant.daily_budget == 0
    # Zero projected savings is below the low savings threshold.
    assert assistant.alerts[0].startswith("Tu ahorro proyectado este mes es bajo")


def test_current_savings_from_goals(aggregator):
    goals = [make_goal(300, goal_id="a"), make_goal(200, goal_id="b")]
    assistant = aggregator.get_savings_assistant(month(3000, 1000), goals, now=NOW)
    assert assistant.current_savings == 500


def test_thresholds_from_environment(monkeypatch):
    monkeypatch.setenv("SAVINGS_MONTHLY_GOAL", "800")
    monkeypatch.setenv("LOW_DAILY_BUDGET_THRESHOLD", "not-a-number")
    aggregator = FinanceStatsAggregator()
    assert aggregator.monthly_goal == 800
    assert aggregator.low_daily_budget_threshold == 20
