from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

TransactionType = Literal["income", "expense"]
Confidence = Literal["high", "medium", "low"]
ReportPeriod = Literal["weekly", "monthly", "ytd", "yearly"]
CardType = Literal["credit", "debit"]
CardPurpose = Literal["gastos_corrientes", "dolares", "gastos_mensuales", "otros"]


def _naive(value: datetime) -> datetime:
    # Stored dates are local wall-clock time; ISO strings with an offset get converted.
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class Category(BaseModel):
    id: str
    name: str
    icon: str
    color: str
    kind: TransactionType


class TransactionDraft(BaseModel):
    amount: float = Field(ge=0)
    gross_amount: float | None = None
    description: str
    category: str
    type: TransactionType
    card_id: str | None = None
    date: datetime
    is_recurring: bool = False
    recurring_id: str | None = None

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value: datetime) -> datetime:
        return _naive(value)

    @model_validator(mode="after")
    def _check_gross_amount(self) -> "TransactionDraft":
        if self.gross_amount is not None and self.gross_amount < self.amount:
            raise ValueError("gross_amount must be greater than or equal to amount")
        return self


class Transaction(TransactionDraft):
    id: str
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime) -> datetime:
        return _naive(value)


class CardDraft(BaseModel):
    name: str
    type: CardType
    last_four_digits: str = Field(pattern=r"^\d{4}$")
    color: str = "#3b82f6"
    balance: float = 0.0
    limit: float | None = Field(default=None, ge=0)
    purpose: CardPurpose | None = None


class Card(CardDraft):
    id: str
    created_at: datetime = Field(default_factory=datetime.now)


class SavingsGoalDraft(BaseModel):
    name: str
    target_amount: float = Field(gt=0)
    current_amount: float = Field(default=0.0, ge=0)
    target_date: date
    category: str
    icon: str = "🎯"
    color: str = "#3b82f6"

    @model_validator(mode="after")
    def _check_current_amount(self) -> "SavingsGoalDraft":
        if self.current_amount > self.target_amount:
            raise ValueError("current_amount cannot exceed target_amount")
        return self


class SavingsGoal(SavingsGoalDraft):
    id: str
    created_at: datetime = Field(default_factory=datetime.now)


class SavingsGoalUpdate(BaseModel):
    name: str | None = None
    target_amount: float | None = Field(default=None, gt=0)
    current_amount: float | None = Field(default=None, ge=0)
    target_date: date | None = None
    category: str | None = None
    icon: str | None = None
    color: str | None = None


class MonthlyExpenseDraft(BaseModel):
    name: str
    amount: float = Field(ge=0)
    category: str
    card_id: str | None = None
    day_of_month: int = Field(ge=1, le=31)
    is_active: bool = True
    description: str | None = None


class MonthlyExpense(MonthlyExpenseDraft):
    id: str
    created_at: datetime = Field(default_factory=datetime.now)


class MonthlyExpenseUpdate(BaseModel):
    name: str | None = None
    amount: float | None = Field(default=None, ge=0)
    category: str | None = None
    card_id: str | None = None
    day_of_month: int | None = Field(default=None, ge=1, le=31)
    is_active: bool | None = None
    description: str | None = None


class ParsedTransactionProposal(BaseModel):
    amount: float = Field(ge=0)
    description: str
    category: str
    type: TransactionType
    confidence: Confidence
    date: datetime | None = None
    type_confidence: Confidence = "medium"
    category_confidence: Confidence = "low"
    card_id: str | None = None


class FinanceStats(BaseModel):
    period: ReportPeriod
    total_income: float
    total_expenses: float
    all_time_income: float
    all_time_expenses: float
    balance: float
    monthly_income: float
    monthly_expenses: float
    weekly_income: float
    weekly_expenses: float
    savings_rate: float
    total_savings: float


class SavingsAssistant(BaseModel):
    monthly_goal: float
    current_savings: float
    projected_savings: float
    recommendations: list[str]
    alerts: list[str]
    spending_limit: float
    daily_budget: float


class CategoryBreakdownRow(BaseModel):
    category_id: str
    category: str
    amount: float
    percentage: float


class MonthlyTrendPoint(BaseModel):
    month: str
    income: float
    expenses: float


class BalancePoint(BaseModel):
    day: date
    balance: float
    income: float
    expenses: float


class ProjectionPoint(BaseModel):
    month: int
    savings: float
    goal: float


class IncomeBreakdown(BaseModel):
    gross: float
    net: float
    taxes: float


class FinanceReport(BaseModel):
    period: ReportPeriod
    stats: FinanceStats
    category_breakdown: list[CategoryBreakdownRow]
    monthly_trend: list[MonthlyTrendPoint]
    balance_history: list[BalancePoint]
    monthly_income_breakdown: IncomeBreakdown
    goals_progress: float
