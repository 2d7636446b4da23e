import pytest

from factories import NOW
from finance_tracker.domain.formatting import format_currency
from finance_tracker.services.chat import NOT_UNDERSTOOD, ChatLogger, greeting
from finance_tracker.services.ledger import Ledger


@pytest.fixture
def chat():
    return ChatLogger(ledger=Ledger(), gross_factor=1.21)


def test_greeting():
    messages = greeting(NOW)
    assert len(messages) == 2
    assert all(message.kind == "assistant" for message in messages)
    assert messages[0].timestamp == NOW


def test_process_detects_transaction(chat):
    reply = chat.process("Gasté 25€ en comida", NOW)
    assert [message.kind for message in reply.messages] == ["user", "transaction"]
    assert reply.messages[0].content == "Gasté 25€ en comida"
    assert reply.proposal is not None
    assert reply.proposal.category == "food"


def test_process_not_understood(chat):
    reply = chat.process("hola", NOW)
    assert reply.proposal is None
    assert [message.kind for message in reply.messages] == ["user", "assistant"]
    assert reply.messages[1].content == NOT_UNDERSTOOD


def test_process_ignores_blank_input(chat):
    reply = chat.process("   ", NOW)
    assert reply.messages == []
    assert reply.proposal is None


def test_confirm_expense(chat):
    proposal = chat.process("Gasté 25€ en comida", NOW).proposal
    transaction, message = chat.confirm(proposal, now=NOW)
    assert message.content == "¡Perfecto! He registrado tu gasto de 25,00 €. ¿Algo más?"
    assert transaction.gross_amount is None
    assert chat.ledger.transactions == [transaction]


def test_confirm_income_records_gross_amount(chat):
    proposal = chat.process("Recibí 1000€ de salario", NOW).proposal
    transaction, message = chat.confirm(proposal, card_id="card-1", now=NOW)
    assert transaction.gross_amount == pytest.approx(1210)
    assert transaction.card_id == "card-1"
    assert transaction.date == NOW
    assert "ingreso de 1000,00 €" in message.content


@pytest.mark.parametrize(
    ("amount", "expected"),
    [
        (25, "25,00 €"),
        (1234.56, "1234,56 €"),
        (12345.6, "12.345,60 €"),
        (1234567.891, "1.234.567,89 €"),
        (-5, "-5,00 €"),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected
