from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from finance_tracker.api.routes import cards, chat, goals, monthly_expenses, parse, reports, transactions
from finance_tracker.core import settings
from finance_tracker.logger import get_logger, setup_logging
from finance_tracker.parser import TransactionParser
from finance_tracker.services.chat import ChatLogger
from finance_tracker.services.ledger import Ledger
from finance_tracker.services.stats import FinanceStatsAggregator

logger = get_logger(__name__)


def create_app() -> FastAPI:
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Initializing services...")
        settings.log_environment()

        ledger = Ledger(data_path=settings.LEDGER_PATH)
        parser = TransactionParser()

        app.state.ledger = ledger
        app.state.parser = parser
        app.state.aggregator = FinanceStatsAggregator()
        app.state.chat = ChatLogger(ledger=ledger, parser=parser)

        logger.info("Services initialized.")
        yield
        logger.info("Service shutting down.")

    app = FastAPI(title="Finance Tracker", lifespan=lifespan)

    app.include_router(parse.router)
    app.include_router(chat.router)
    app.include_router(transactions.router)
    app.include_router(cards.router)
    app.include_router(goals.router)
    app.include_router(monthly_expenses.router)
    app.include_router(reports.router)

    return app


app = create_app()
