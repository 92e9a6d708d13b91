"""Append-only message log."""
import logging
import threading
import time
from typing import List, Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.access import is_anonymous
from lifematch.core.config import settings
from lifematch.core.exceptions import InvalidInputError
from lifematch.models.message import Message
from lifematch.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class MonotonicClock:
    """Wall clock in nanoseconds that never goes backwards."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, time.time_ns())
            return self._last


message_clock = MonotonicClock()


class MessageRepository(BaseRepository[Message]):
    """Repository for the ``messages`` table. Rows are never edited or deleted."""

    def __init__(
        self,
        session: AsyncSession,
        clock: MonotonicClock = message_clock,
        max_length: Optional[int] = None,
    ) -> None:
        super().__init__(Message, session)
        self.clock = clock
        self.max_length = max_length or settings.MAX_MESSAGE_LENGTH

    async def append(self, sender: str, recipient: str, content: str) -> Message:
        """Append a message to the pair's log.

        Args:
            sender: Sending identity
            recipient: Receiving identity, may equal the sender
            content: Message text

        Returns:
            Stored message

        Raises:
            InvalidInputError: If the recipient is blank, or the content is
                blank or too long
        """
        if is_anonymous(recipient):
            raise InvalidInputError("recipient is required", field="to")
        if not content or not content.strip():
            raise InvalidInputError("message content must not be empty", field="content")
        if len(content) > self.max_length:
            raise InvalidInputError(
                f"message content exceeds {self.max_length} characters",
                field="content",
            )
        row = await self.create(
            sender=sender,
            recipient=recipient,
            content=content,
            timestamp=self.clock.now(),
        )
        logger.debug("Appended message %s from %s to %s", row.id, sender, recipient)
        return row

    async def list_between(self, a: str, b: str) -> List[Message]:
        """All messages of the unordered pair, oldest first."""
        return await self.list(
            select(Message)
            .where(
                or_(
                    and_(Message.sender == a, Message.recipient == b),
                    and_(Message.sender == b, Message.recipient == a),
                )
            )
            .order_by(Message.timestamp, Message.id)
        )
