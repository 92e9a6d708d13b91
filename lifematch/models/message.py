"""SQLAlchemy model for the append-only message log."""
from sqlalchemy import BigInteger, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lifematch.models.base import Base


class Message(Base):
    """Direct message between two identities."""

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_conversation", "sender", "recipient", "timestamp"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sender: Mapped[str] = mapped_column(String(255))
    recipient: Mapped[str] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text)
    # Wall clock in nanoseconds
    timestamp: Mapped[int] = mapped_column(BigInteger)
