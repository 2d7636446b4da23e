from fastapi import HTTPException, Request

from finance_tracker.parser import TransactionParser
from finance_tracker.services.chat import ChatLogger
from finance_tracker.services.ledger import Ledger
from finance_tracker.services.stats import FinanceStatsAggregator


def get_ledger(request: Request) -> Ledger:
    ledger = getattr(request.app.state, "ledger", None)
    if not ledger:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return ledger


def get_parser(request: Request) -> TransactionParser:
    parser = getattr(request.app.state, "parser", None)
    if not parser:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return parser


def get_aggregator(request: Request) -> FinanceStatsAggregator:
    aggregator = getattr(request.app.state, "aggregator", None)
    if not aggregator:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return aggregator


def get_chat(request: Request) -> ChatLogger:
    chat = getattr(request.app.state, "chat", None)
    if not chat:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return chat
