from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

from finance_tracker.main import app
from finance_tracker.parser import TransactionParser
from finance_tracker.services.chat import ChatLogger
from finance_tracker.services.ledger import Ledger
from finance_tracker.services.stats import FinanceStatsAggregator

client = TestClient(app)

NOW = "2026-03-10T12:00:00"


@pytest.fixture
def ledger() -> Generator[Ledger, None, None]:
    ledger = Ledger()
    parser = TransactionParser()
    app.state.ledger = ledger
    app.state.parser = parser
    app.state.aggregator = FinanceStatsAggregator(monthly_goal=500)
    app.state.chat = ChatLogger(ledger=ledger, parser=parser, gross_factor=1.21)
    yield ledger
    for name in ("ledger", "parser", "aggregator", "chat"):
        delattr(app.state, name)


def test_parse_endpoint(ledger: Ledger) -> None:
    response = client.post("/api/parse", json={"text": "Gasté 25€ en comida", "now": NOW})
    assert response.status_code == 200
    data = response.json()
    assert data["amount"] == 25
    assert data["category"] == "food"
    assert data["confidence"] == "high"
    assert data["date"] == NOW


def test_parse_endpoint_without_amount(ledger: Ledger) -> None:
    response = client.post("/api/parse", json={"text": "hola"})
    assert response.status_code == 200
    assert response.json() is None


def test_chat_round_trip(ledger: Ledger) -> None:
    response = client.post("/api/chat/messages", json={"text": "Gasté 25€ en comida", "now": NOW})
    assert response.status_code == 200
    reply = response.json()
    assert [message["kind"] for message in reply["messages"]] == ["user", "transaction"]

    response = client.post("/api/chat/confirm", json={"proposal": reply["proposal"]})
    assert response.status_code == 200
    assert response.json()["message"]["content"] == "¡Perfecto! He registrado tu gasto de 25,00 €. ¿Algo más?"

    transactions = client.get("/api/transactions").json()
    assert len(transactions) == 1
    assert transactions[0]["category_name"] == "Comida"
    assert transactions[0]["card_name"] is None


def test_chat_greeting() -> None:
    response = client.get("/api/chat/greeting")
    assert response.status_code == 200
    assert len(response.json()) == 2


def test_transactions_crud(ledger: Ledger) -> None:
    response = client.post(
        "/api/transactions",
        json={"amount": 12.5, "description": "taxi", "category": "transport", "type": "expense", "date": NOW},
    )
    assert response.status_code == 201
    transaction_id = response.json()["id"]

    assert client.delete(f"/api/transactions/{transaction_id}").status_code == 204
    assert client.delete(f"/api/transactions/{transaction_id}").status_code == 404


def test_card_validation(ledger: Ledger) -> None:
    response = client.post("/api/cards", json={"name": "Visa", "type": "credit", "last_four_digits": "12a4"})
    assert response.status_code == 422

    response = client.post("/api/cards", json={"name": "Visa", "type": "credit", "last_four_digits": "1234"})
    assert response.status_code == 201
    assert [card["name"] for card in client.get("/api/cards").json()] == ["Visa"]


def test_goal_deposit_and_update(ledger: Ledger) -> None:
    response = client.post(
        "/api/goals",
        json={"name": "Viaje", "target_amount": 1000, "current_amount": 900, "target_date": "2026-12-31", "category": "travel"},
    )
    assert response.status_code == 201
    goal_id = response.json()["id"]

    response = client.post(f"/api/goals/{goal_id}/deposit", json={"amount": 500})
    assert response.status_code == 200
    assert response.json()["current_amount"] == 1000

    assert client.post("/api/goals/missing/deposit", json={"amount": 10}).status_code == 404
    assert client.patch(f"/api/goals/{goal_id}", json={"current_amount": 5000}).status_code == 422
    assert client.patch("/api/goals/missing", json={"name": "x"}).status_code == 404

    goals = client.get("/api/goals").json()
    assert goals[0]["days_remaining"] is not None


def test_monthly_expenses(ledger: Ledger) -> None:
    response = client.post(
        "/api/monthly-expenses",
        json={"name": "Gimnasio", "amount": 30, "category": "health", "day_of_month": 1},
    )
    assert response.status_code == 201
    expense_id = response.json()["id"]

    current = client.get("/api/monthly-expenses/current-month").json()
    assert current == {"total": 30, "active_count": 1}

    response = client.post(f"/api/monthly-expenses/{expense_id}/toggle")
    assert response.json()["is_active"] is False
    assert client.get("/api/monthly-expenses", params={"active_only": True}).json() == []
    assert client.delete("/api/monthly-expenses/missing").status_code == 404


def test_stats_and_reports(ledger: Ledger) -> None:
    response = client.get("/api/stats", params={"period": "monthly"})
    assert response.status_code == 200
    assert response.json()["balance"] == 0

    assert client.get("/api/stats", params={"period": "daily"}).status_code == 422
    assert client.get("/api/savings-assistant").json()["monthly_goal"] == 500
    assert len(client.get("/api/savings-assistant/projection", params={"months": 3}).json()) == 4
    assert client.get("/api/reports", params={"period": "ytd"}).status_code == 200


def test_categories() -> None:
    response = client.get("/api/categories", params={"kind": "income"})
    assert response.status_code == 200
    assert all(category["kind"] == "income" for category in response.json())


def test_uninitialized_service() -> None:
    response = client.get("/api/cards")
    assert response.status_code == 500
    assert response.json()["detail"] == "Service not initialized"


def test_parse_endpoint_accepts_timezone_aware_now(ledger: Ledger) -> None:
    payload = {"text": "Gasté 5€ el 15 de julio", "now": "2026-03-10T12:00:00Z"}
    response = client.post("/api/parse", json=payload)
    assert response.status_code == 200
    assert response.json()["date"] == "2025-07-15T00:00:00"

    response = client.post("/api/chat/messages", json=payload)
    assert response.status_code == 200
    assert response.json()["proposal"]["amount"] == 5


def test_confirm_rejects_negative_amount(ledger: Ledger) -> None:
    proposal = {
        "amount": -5,
        "description": "comida",
        "category": "food",
        "type": "expense",
        "confidence": "high",
        "date": NOW,
    }
    response = client.post("/api/chat/confirm", json={"proposal": proposal})
    assert response.status_code == 422
    assert ledger.transactions == []
