from typing import Annotated

from fastapi import APIRouter, Depends

from finance_tracker.api.dependencies import get_chat
from finance_tracker.api.schemas import ChatMessageOut, ChatReplyOut, ConfirmRequest, ConfirmResponse, ParseRequest
from finance_tracker.services.chat import ChatLogger, ChatMessage, greeting

router = APIRouter(prefix="/api/chat")


def _message_out(message: ChatMessage) -> ChatMessageOut:
    return ChatMessageOut(kind=message.kind, content=message.content, timestamp=message.timestamp)


@router.get("/greeting")
async def get_greeting() -> list[ChatMessageOut]:
    return [_message_out(message) for message in greeting()]


@router.post("/messages")
async def send_message(
    req: ParseRequest,
    chat: Annotated[ChatLogger, Depends(get_chat)],
) -> ChatReplyOut:
    reply = chat.process(req.text, req.now)
    return ChatReplyOut(
        messages=[_message_out(message) for message in reply.messages],
        proposal=reply.proposal,
    )


@router.post("/confirm")
async def confirm_proposal(
    req: ConfirmRequest,
    chat: Annotated[ChatLogger, Depends(get_chat)],
) -> ConfirmResponse:
    transaction, message = chat.confirm(req.proposal, card_id=req.card_id)
    return ConfirmResponse(transaction=transaction, message=_message_out(message))
