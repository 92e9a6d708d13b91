"""Messaging service over the append-only message log."""
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import Operation, Role
from lifematch.core.exceptions import UnauthorizedError
from lifematch.core.logging import get_logger
from lifematch.database import serialized_transaction
from lifematch.models.message import Message
from lifematch.repositories.message import MessageRepository
from lifematch.services.access import AccessService

logger = get_logger(__name__)


class MessagingService:
    """Send messages and read conversations."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.access = AccessService(session)
        self.messages = MessageRepository(session)

    async def send_message(self, caller: Optional[str], recipient: str, content: str) -> Message:
        async with serialized_transaction(self.session):
            await self.access.authorize(caller, Operation.SEND_MESSAGE)
            message = await self.messages.append(caller, recipient, content)
        logger.info("Message sent", message_id=message.id, sender=caller, recipient=recipient)
        return message

    async def get_caller_messages(self, caller: Optional[str], other: str) -> List[Message]:
        """Conversation between the caller and another identity."""
        await self.access.authorize(caller, Operation.READ_MESSAGES)
        return await self.messages.list_between(caller, other)

    async def get_messages(self, caller: Optional[str], a: str, b: str) -> List[Message]:
        """Conversation between two identities; the caller must be one of them or an admin.

        Raises:
            UnauthorizedError: If the caller is neither participant nor an admin
        """
        role = await self.access.authorize(caller, Operation.READ_MESSAGES)
        if caller not in (a, b) and role is not Role.ADMIN:
            raise UnauthorizedError(
                "Only participants may read a conversation",
                identity=caller,
                operation=Operation.READ_MESSAGES.value,
                context={"participants": [a, b]},
            )
        return await self.messages.list_between(a, b)
