"""
Chatbot routes for the public site widget.
"""
from fastapi import APIRouter, Request
from typing import List
import logging

from studio_gateway.schemas import ChatRequest, ChatResponse, QuickReply
from studio_gateway.services.chatbot import QUICK_REPLIES, get_bot_response
from studio_gateway.utils.rate_limit import RATE_LIMITS, limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


@router.post("", response_model=ChatResponse)
@limiter.limit(RATE_LIMITS["chatbot"])
async def chat(request: Request, chat_request: ChatRequest):
    """Answer a visitor message with the matching canned reply."""
    reply = get_bot_response(chat_request.message)
    logger.debug(f"Chatbot reply for {chat_request.message!r}: {reply[:40]}...")
    return ChatResponse(reply=reply)


@router.get("/quick-replies", response_model=List[QuickReply])
async def quick_replies():
    return [QuickReply(label=label, message=message) for label, message in QUICK_REPLIES]
