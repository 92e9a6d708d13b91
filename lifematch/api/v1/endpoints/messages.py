"""Messaging endpoints."""
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.dependencies import get_caller_identity, get_db
from lifematch.models.message import Message as MessageModel
from lifematch.schemas.message import Message, MessageCreate
from lifematch.services.messaging import MessagingService

router = APIRouter()


@router.post("", response_model=Message, status_code=status.HTTP_201_CREATED)
async def send_message(
    body: MessageCreate,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> MessageModel:
    return await MessagingService(session).send_message(caller, body.to, body.content)


@router.get("/{other}", response_model=List[Message])
async def get_caller_messages(
    other: str,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[MessageModel]:
    """Conversation between the caller and another identity, oldest first."""
    return await MessagingService(session).get_caller_messages(caller, other)


@router.get("/{user1}/{user2}", response_model=List[Message])
async def get_messages(
    user1: str,
    user2: str,
    caller: Optional[str] = Depends(get_caller_identity),
    session: AsyncSession = Depends(get_db),
) -> List[MessageModel]:
    """Conversation between two identities (participants or admin)."""
    return await MessagingService(session).get_messages(caller, user1, user2)
