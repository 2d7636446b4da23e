from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from finance_tracker.models import ParsedTransactionProposal, Transaction, _naive


class ParseRequest(BaseModel):
    text: str
    now: datetime | None = None

    @field_validator("now")
    @classmethod
    def _normalize_now(cls, value: datetime | None) -> datetime | None:
        return _naive(value) if value is not None else None


class ChatMessageOut(BaseModel):
    kind: str
    content: str
    timestamp: datetime


class ChatReplyOut(BaseModel):
    messages: list[ChatMessageOut]
    proposal: ParsedTransactionProposal | None = None


class ConfirmRequest(BaseModel):
    proposal: ParsedTransactionProposal
    card_id: str | None = None


class ConfirmResponse(BaseModel):
    transaction: Transaction
    message: ChatMessageOut


class DepositRequest(BaseModel):
    amount: float = Field(gt=0)


class CurrentMonthExpenses(BaseModel):
    total: float
    active_count: int
