"""Tests for the messaging service."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.exceptions import InvalidInputError, UnauthorizedError
from lifematch.services.messaging import MessagingService


@pytest.fixture
def messaging(db_session: AsyncSession) -> MessagingService:
    return MessagingService(db_session)


@pytest.mark.asyncio
async def test_conversation_is_ordered_and_symmetric(messaging, seeded_roles):
    await messaging.send_message("alice", "bob", "hi")
    await messaging.send_message("bob", "alice", "hello")
    await messaging.send_message("alice", "carol", "elsewhere")
    await messaging.send_message("alice", "bob", "how are you?")

    from_alice = await messaging.get_caller_messages("alice", "bob")
    from_bob = await messaging.get_caller_messages("bob", "alice")

    assert [m.content for m in from_alice] == ["hi", "hello", "how are you?"]
    assert [m.id for m in from_bob] == [m.id for m in from_alice]
    timestamps = [m.timestamp for m in from_alice]
    assert timestamps == sorted(timestamps)


@pytest.mark.asyncio
async def test_guest_cannot_message(messaging, seeded_roles):
    with pytest.raises(UnauthorizedError):
        await messaging.send_message("stranger", "bob", "hi")
    with pytest.raises(UnauthorizedError):
        await messaging.send_message(None, "bob", "hi")


@pytest.mark.asyncio
async def test_blank_message_rejected(messaging, seeded_roles):
    with pytest.raises(InvalidInputError):
        await messaging.send_message("alice", "bob", "   ")

    assert await messaging.get_caller_messages("alice", "bob") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("recipient", ["", "   "])
async def test_blank_recipient_rejected(messaging, seeded_roles, recipient):
    with pytest.raises(InvalidInputError) as exc_info:
        await messaging.send_message("alice", recipient, "hi")

    assert exc_info.value.field == "to"
    assert await messaging.get_messages("admin-1", "alice", recipient) == []


@pytest.mark.asyncio
async def test_third_party_reads_need_admin(messaging, seeded_roles):
    await messaging.send_message("alice", "bob", "private")

    with pytest.raises(UnauthorizedError):
        await messaging.get_messages("carol", "alice", "bob")

    assert len(await messaging.get_messages("admin-1", "alice", "bob")) == 1
    assert len(await messaging.get_messages("bob", "alice", "bob")) == 1
