from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from finance_tracker.core import settings
from finance_tracker.data.categories import category_name
from finance_tracker.domain.formatting import format_currency
from finance_tracker.logger import get_logger
from finance_tracker.models import ParsedTransactionProposal, Transaction, TransactionDraft
from finance_tracker.parser import TransactionParser
from finance_tracker.services.ledger import Ledger

logger = get_logger(__name__)

MessageKind = Literal["user", "assistant", "transaction"]

GREETING = (
    "¡Hola! Soy tu asistente financiero. Puedes escribirme tus gastos e ingresos de forma natural.",
    'Ejemplos: "Gasté 25€ en comida el 15 de julio", "Recibí 1500€ de salario ayer", '
    '"Pagué 50€ de gasolina hace 2 días".',
)
NOT_UNDERSTOOD = (
    'No pude detectar una transacción válida. Intenta con algo como "Gasté 25€ en comida" '
    'o "Recibí 1500€ de salario".'
)
DETECTED = "Transacción detectada"


@dataclass(frozen=True)
class ChatMessage:
    kind: MessageKind
    content: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class ChatReply:
    messages: list[ChatMessage]
    proposal: ParsedTransactionProposal | None = None


def greeting(now: datetime | None = None) -> list[ChatMessage]:
    now = now or datetime.now()
    return [ChatMessage("assistant", content, now) for content in GREETING]


def describe_proposal(proposal: ParsedTransactionProposal) -> str:
    kind = "Ingreso" if proposal.type == "income" else "Gasto"
    return (
        f"{kind} de {format_currency(proposal.amount)} · {category_name(proposal.category)}"
        f" · {proposal.description}"
    )


def confirmation_message(transaction: Transaction) -> str:
    kind = "ingreso" if transaction.type == "income" else "gasto"
    return f"¡Perfecto! He registrado tu {kind} de {format_currency(transaction.amount)}. ¿Algo más?"


class ChatLogger:
    """
    Conversational front of the parser: one reply per user message, and a
    confirmation step that writes the accepted proposal to the ledger.
    """

    def __init__(
        self,
        ledger: Ledger,
        parser: TransactionParser | None = None,
        gross_factor: float | None = None,
    ):
        self.ledger = ledger
        self.parser = parser or TransactionParser()
        self.gross_factor = gross_factor if gross_factor is not None else settings.get_income_gross_factor()

    def process(self, text: str, now: datetime | None = None) -> ChatReply:
        now = now or datetime.now()
        cleaned = text.strip()
        if not cleaned:
            return ChatReply(messages=[])

        user_message = ChatMessage("user", cleaned, now)
        proposal = self.parser.parse(cleaned, now)
        if proposal is None:
            logger.info("[CHAT] Could not understand: '%s'", cleaned[:50])
            return ChatReply(messages=[user_message, ChatMessage("assistant", NOT_UNDERSTOOD, now)])

        logger.info("[CHAT] Proposal (%s confidence): %s", proposal.confidence, describe_proposal(proposal))
        return ChatReply(
            messages=[user_message, ChatMessage("transaction", DETECTED, now)],
            proposal=proposal,
        )

    def to_draft(self, proposal: ParsedTransactionProposal, now: datetime | None = None) -> TransactionDraft:
        gross_amount = proposal.amount * self.gross_factor if proposal.type == "income" else None
        return TransactionDraft(
            amount=proposal.amount,
            gross_amount=gross_amount,
            description=proposal.description,
            category=proposal.category,
            type=proposal.type,
            card_id=proposal.card_id,
            date=proposal.date or now or datetime.now(),
        )

    def confirm(
        self,
        proposal: ParsedTransactionProposal,
        card_id: str | None = None,
        now: datetime | None = None,
    ) -> tuple[Transaction, ChatMessage]:
        if card_id is not None:
            proposal = proposal.model_copy(update={"card_id": card_id})
        transaction = self.ledger.add_transaction(self.to_draft(proposal, now))
        return transaction, ChatMessage("assistant", confirmation_message(transaction), now or datetime.now())
