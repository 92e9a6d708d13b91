"""Tests for the interest/match state machine."""
import asyncio

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from lifematch.core.access import Role
from lifematch.core.exceptions import (
    ConflictError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from lifematch.models import Base
from lifematch.models.matchmaking import InterestStatus
from lifematch.repositories.profile import ProfileRepository
from lifematch.repositories.user import RoleRepository
from lifematch.services.matchmaking import MatchmakingService
from lifematch.services.scoring import compatibility_score


@pytest.fixture
def service(db_session: AsyncSession) -> MatchmakingService:
    return MatchmakingService(db_session)


@pytest_asyncio.fixture
async def profiles_for(db_session, matrimonial_profile):
    """Store a matrimonial profile for each given identity."""
    repo = ProfileRepository(db_session)

    async def _store(*identities, **overrides):
        for identity in identities:
            await repo.put_matrimonial_profile(
                identity, matrimonial_profile(name=identity.title(), **overrides)
            )
        await db_session.commit()

    return _store


@pytest.mark.asyncio
async def test_send_interest(service, seeded_roles, profiles_for):
    await profiles_for("bob")

    interest = await service.send_interest("alice", "bob")

    assert interest.sender == "alice"
    assert interest.recipient == "bob"
    assert interest.status == InterestStatus.PENDING.value
    assert [i.id for i in await service.get_sent_interests("alice")] == [interest.id]
    assert [i.id for i in await service.get_received_interests("bob")] == [interest.id]


@pytest.mark.asyncio
async def test_send_interest_rejections(service, seeded_roles, profiles_for):
    await profiles_for("alice", "bob")

    with pytest.raises(ConflictError):
        await service.send_interest("alice", "alice")
    with pytest.raises(ConflictError):
        await service.send_interest("alice", "carol")
    with pytest.raises(UnauthorizedError):
        await service.send_interest("stranger", "bob")

    await service.send_interest("alice", "bob")
    with pytest.raises(ConflictError):
        await service.send_interest("alice", "bob")

    assert len(await service.get_sent_interests("alice")) == 1


@pytest.mark.asyncio
async def test_accept_creates_scored_match(service, seeded_roles, profiles_for, matrimonial_profile):
    await profiles_for("alice", "bob")
    interest = await service.send_interest("alice", "bob")

    accepted = await service.accept_interest("bob", interest.id)

    assert accepted.status == InterestStatus.ACCEPTED.value
    matches = await service.get_caller_matches("alice")
    assert len(matches) == 1
    assert {matches[0].user1, matches[0].user2} == {"alice", "bob"}
    expected = compatibility_score(
        matrimonial_profile(name="Alice"), matrimonial_profile(name="Bob")
    )
    assert matches[0].compatibility_score == expected
    assert [m.id for m in await service.get_caller_matches("bob")] == [matches[0].id]


@pytest.mark.asyncio
async def test_accept_without_sender_profile_scores_zero(service, seeded_roles, profiles_for):
    await profiles_for("bob")
    interest = await service.send_interest("alice", "bob")

    await service.accept_interest("bob", interest.id)

    assert (await service.get_caller_matches("bob"))[0].compatibility_score == 0


@pytest.mark.asyncio
async def test_only_recipient_responds(service, seeded_roles, profiles_for):
    await profiles_for("bob")
    interest = await service.send_interest("alice", "bob")
    interest_id = interest.id

    with pytest.raises(UnauthorizedError):
        await service.accept_interest("alice", interest_id)
    with pytest.raises(UnauthorizedError):
        await service.reject_interest("carol", interest_id)

    received = await service.get_received_interests("bob")
    assert received[0].status == InterestStatus.PENDING.value


@pytest.mark.asyncio
async def test_respond_to_unknown_interest(service, seeded_roles):
    with pytest.raises(NotFoundError):
        await service.accept_interest("bob", 999)
    with pytest.raises(NotFoundError):
        await service.reject_interest("bob", 999)


@pytest.mark.asyncio
async def test_responses_are_terminal(service, seeded_roles, profiles_for):
    await profiles_for("bob", "carol")
    first = await service.send_interest("alice", "bob")
    second = await service.send_interest("alice", "carol")
    first_id, second_id = first.id, second.id

    await service.accept_interest("bob", first_id)
    await service.reject_interest("carol", second_id)

    with pytest.raises(InvalidStateError):
        await service.accept_interest("bob", first_id)
    with pytest.raises(InvalidStateError):
        await service.reject_interest("bob", first_id)
    with pytest.raises(InvalidStateError):
        await service.accept_interest("carol", second_id)

    assert await service.get_caller_matches("carol") == []


@pytest.mark.asyncio
async def test_rejected_interest_can_be_sent_again(service, seeded_roles, profiles_for):
    await profiles_for("bob")
    first = await service.send_interest("alice", "bob")
    await service.reject_interest("bob", first.id)

    again = await service.send_interest("alice", "bob")

    assert again.id != first.id
    assert again.status == InterestStatus.PENDING.value


@pytest.mark.asyncio
async def test_matched_pair_cannot_exchange_interest(service, seeded_roles, profiles_for):
    await profiles_for("alice", "bob")
    interest = await service.send_interest("alice", "bob")
    await service.accept_interest("bob", interest.id)

    with pytest.raises(ConflictError):
        await service.send_interest("bob", "alice")
    with pytest.raises(ConflictError):
        await service.send_interest("alice", "bob")


@pytest.mark.asyncio
async def test_crossed_interests_yield_one_match(service, seeded_roles, profiles_for):
    await profiles_for("alice", "bob")
    to_bob = await service.send_interest("alice", "bob")
    to_alice = await service.send_interest("bob", "alice")
    to_bob_id, to_alice_id = to_bob.id, to_alice.id

    await service.accept_interest("bob", to_bob_id)
    accepted = await service.accept_interest("alice", to_alice_id)

    assert accepted.status == InterestStatus.ACCEPTED.value
    assert len(await service.get_caller_matches("alice")) == 1


@pytest.mark.asyncio
async def test_save_match(service, seeded_roles, profiles_for):
    await profiles_for("bob")

    match = await service.save_match("alice", "bob", 88)

    assert match.user1 == "alice"
    assert match.user2 == "bob"
    assert match.compatibility_score == 88


@pytest.mark.asyncio
@pytest.mark.parametrize("user2, score", [("alice", 50), ("bob", 101), ("bob", -1)])
async def test_save_match_invalid_input(service, seeded_roles, profiles_for, user2, score):
    await profiles_for("alice", "bob")

    with pytest.raises(InvalidInputError):
        await service.save_match("alice", user2, score)


@pytest.mark.asyncio
async def test_save_match_requires_profile_and_new_pair(service, seeded_roles, profiles_for):
    await profiles_for("alice")

    with pytest.raises(NotFoundError):
        await service.save_match("bob", "carol", 70)

    await service.save_match("bob", "alice", 70)
    with pytest.raises(ConflictError):
        await service.save_match("bob", "alice", 10)


@pytest_asyncio.fixture
async def file_sessions(tmp_path, matrimonial_profile):
    """Session factory over a file database shared by independent connections."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'matches.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        for identity in ("alice", "bob"):
            await RoleRepository(session).set_role(identity, Role.USER)
            await ProfileRepository(session).put_matrimonial_profile(
                identity, matrimonial_profile(name=identity.title())
            )
        await session.commit()
    try:
        yield factory
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_concurrent_crossed_accepts_yield_one_match(file_sessions):
    async with file_sessions() as session:
        service = MatchmakingService(session)
        to_bob = await service.send_interest("alice", "bob")
        to_alice = await service.send_interest("bob", "alice")
        to_bob_id, to_alice_id = to_bob.id, to_alice.id

    async def accept(caller, interest_id):
        async with file_sessions() as session:
            return await MatchmakingService(session).accept_interest(caller, interest_id)

    await asyncio.gather(accept("bob", to_bob_id), accept("alice", to_alice_id))

    async with file_sessions() as session:
        service = MatchmakingService(session)
        matches = await service.get_caller_matches("alice")
        statuses = {i.status for i in await service.get_sent_interests("alice")}
        statuses |= {i.status for i in await service.get_sent_interests("bob")}

    assert len(matches) == 1
    assert statuses == {InterestStatus.ACCEPTED.value}


@pytest.mark.asyncio
async def test_concurrent_double_accept_of_same_interest(file_sessions):
    async with file_sessions() as session:
        interest = await MatchmakingService(session).send_interest("alice", "bob")
        interest_id = interest.id

    async def accept():
        async with file_sessions() as session:
            return await MatchmakingService(session).accept_interest("bob", interest_id)

    results = await asyncio.gather(accept(), accept(), return_exceptions=True)

    assert sum(1 for r in results if isinstance(r, InvalidStateError)) == 1
    async with file_sessions() as session:
        assert len(await MatchmakingService(session).get_caller_matches("bob")) == 1
