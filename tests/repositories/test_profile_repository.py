"""Tests for the profile repository."""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from lifematch.core.exceptions import InvalidInputError
from lifematch.repositories.profile import ProfileRepository
from lifematch.schemas.profile import UserProfile


@pytest.fixture
def profile_repo(db_session: AsyncSession) -> ProfileRepository:
    """Create profile repository."""
    return ProfileRepository(db_session)


@pytest.mark.asyncio
async def test_get_profile_absent(profile_repo):
    assert await profile_repo.get_profile("nobody") is None


@pytest.mark.asyncio
async def test_put_job_profile_replaces_wholesale(profile_repo, job_profile):
    await profile_repo.put_job_profile("alice", job_profile(resume="blob://cv-1"))
    await profile_repo.put_job_profile("alice", job_profile(location="Berlin"))

    stored = await profile_repo.get_profile("alice")

    assert stored.job_profile.location == "Berlin"
    assert stored.job_profile.resume is None
    assert stored.matrimonial_profile is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"name": "  "}, "name"),
        ({"experience": -1}, "experience"),
        ({"min_salary": -5}, "min_salary"),
        ({"min_salary": 200, "max_salary": 100}, "min_salary"),
    ],
)
async def test_put_job_profile_validation(profile_repo, job_profile, overrides, field):
    with pytest.raises(InvalidInputError) as exc_info:
        await profile_repo.put_job_profile("alice", job_profile(**overrides))

    assert exc_info.value.field == field
    assert await profile_repo.get_job_profile("alice") is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"age": 0}, "age"),
        ({"min_age": 0}, "min_age"),
        ({"min_age": 40, "max_age": 30}, "min_age"),
        ({"name": ""}, "name"),
    ],
)
async def test_put_matrimonial_profile_validation(
    profile_repo, matrimonial_profile, overrides, field
):
    with pytest.raises(InvalidInputError) as exc_info:
        await profile_repo.put_matrimonial_profile("alice", matrimonial_profile(**overrides))

    assert exc_info.value.field == field


@pytest.mark.asyncio
async def test_put_profile_deletes_absent_sub_profile(
    profile_repo, job_profile, matrimonial_profile
):
    await profile_repo.put_profile(
        "alice",
        UserProfile(job_profile=job_profile(), matrimonial_profile=matrimonial_profile()),
    )
    await profile_repo.put_profile("alice", UserProfile(matrimonial_profile=matrimonial_profile()))

    stored = await profile_repo.get_profile("alice")

    assert stored.job_profile is None
    assert stored.matrimonial_profile.name == "Sam Example"


@pytest.mark.asyncio
async def test_put_profile_validates_before_writing(
    profile_repo, job_profile, matrimonial_profile
):
    with pytest.raises(InvalidInputError):
        await profile_repo.put_profile(
            "alice",
            UserProfile(
                job_profile=job_profile(),
                matrimonial_profile=matrimonial_profile(age=-3),
            ),
        )

    assert await profile_repo.get_job_profile("alice") is None


@pytest.mark.asyncio
async def test_list_matrimonial_profiles_excludes_and_searches(
    profile_repo, matrimonial_profile
):
    await profile_repo.put_matrimonial_profile("carol", matrimonial_profile(name="Carol Jones"))
    await profile_repo.put_matrimonial_profile("alice", matrimonial_profile(name="Alice Smith"))
    await profile_repo.put_matrimonial_profile("bob", matrimonial_profile(name="Bob Smith"))

    everyone = await profile_repo.list_matrimonial_profiles()
    others = await profile_repo.list_matrimonial_profiles(exclude=["alice"])
    smiths = await profile_repo.list_matrimonial_profiles(search="SMITH")

    assert [p.identity for p in everyone] == ["alice", "bob", "carol"]
    assert [p.identity for p in others] == ["bob", "carol"]
    assert [p.identity for p in smiths] == ["alice", "bob"]
