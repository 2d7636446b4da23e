from typing import Annotated

from fastapi import APIRouter, Depends

from finance_tracker.api.dependencies import get_parser
from finance_tracker.api.schemas import ParseRequest
from finance_tracker.models import ParsedTransactionProposal
from finance_tracker.parser import TransactionParser

router = APIRouter()


@router.post("/api/parse", response_model=ParsedTransactionProposal | None)
async def parse_text(
    req: ParseRequest,
    parser: Annotated[TransactionParser, Depends(get_parser)],
) -> ParsedTransactionProposal | None:
    return parser.parse(req.text, req.now)
