"""Pydantic models for direct messages."""
from lifematch.schemas.base import BaseSchema


class MessageCreate(BaseSchema):
    """Request body for sending a message."""

    to: str
    content: str


class Message(BaseSchema):
    """Stored message; timestamp is in nanoseconds."""

    id: int
    sender: str
    recipient: str
    content: str
    timestamp: int
