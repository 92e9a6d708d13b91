"""Tests for API routes."""
import logging
from typing import Dict, Optional

import pytest
from httpx import AsyncClient

from lifematch.core.config import settings

API = "/api/v1"


def as_caller(identity: Optional[str]) -> Dict[str, str]:
    """Identity header for a request."""
    return {settings.IDENTITY_HEADER: identity} if identity is not None else {}


async def initialize(client: AsyncClient, *identities: str) -> None:
    for identity in identities:
        response = await client.post(f"{API}/access/initialize", headers=as_caller(identity))
        assert response.status_code == 200


LISTING = {
    "title": "Backend Engineer",
    "company": "Acme",
    "location": "Remote",
    "category": "Engineering",
    "job_type": "Full-time",
    "experience_level": "Mid-Level",
    "min_salary": 90000,
    "max_salary": 130000,
}

JOB_PROFILE = {
    "name": "Alice Example",
    "education": "BSc Computer Science",
    "location": "Remote",
    "profession": "Software Engineer",
    "experience": 4,
    "min_salary": 100000,
    "max_salary": 120000,
}


def matrimonial(name: str, **overrides) -> Dict:
    data = {
        "name": name,
        "age": 30,
        "religion": "Hindu",
        "occupation": "Software Engineer",
        "preferred_location": "Mumbai",
        "min_age": 25,
        "max_age": 35,
    }
    data.update(overrides)
    return data


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get(f"{API}/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["components"] == {"database": True}
    assert data["version"] == settings.VERSION


@pytest.mark.asyncio
async def test_initialize_and_role(client: AsyncClient):
    first = await client.post(f"{API}/access/initialize", headers=as_caller("root-admin"))
    anonymous = await client.post(f"{API}/access/initialize")
    await initialize(client, "alice")

    assert first.json() == {"identity": "root-admin", "role": "admin"}
    assert anonymous.json() == {"identity": None, "role": "guest"}
    assert (await client.get(f"{API}/access/role", headers=as_caller("alice"))).json()[
        "role"
    ] == "user"
    admin = await client.get(f"{API}/access/is-admin", headers=as_caller("root-admin"))
    assert admin.json() == {"is_admin": True}


@pytest.mark.asyncio
async def test_unauthorized_error_payload(client: AsyncClient):
    await initialize(client, "alice")

    response = await client.get(f"{API}/users", headers=as_caller("alice"))

    assert response.status_code == 403
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "UNAUTHORIZED"
    assert body["details"]["operation"] == "list_users"


@pytest.mark.asyncio
async def test_request_context_in_logs(client: AsyncClient, caplog):
    await initialize(client, "alice")

    with caplog.at_level(logging.WARNING, logger="lifematch.services.access"):
        await client.get(f"{API}/users", headers=as_caller("alice"))

    denied = [r.getMessage() for r in caplog.records if "Access denied" in r.getMessage()]
    assert denied
    assert '"path": "/api/v1/users"' in denied[0]
    assert '"method": "GET"' in denied[0]


@pytest.mark.asyncio
async def test_role_assignment(client: AsyncClient):
    await initialize(client, "root-admin", "alice")

    denied = await client.put(
        f"{API}/access/roles/bob", json={"role": "admin"}, headers=as_caller("alice")
    )
    granted = await client.put(
        f"{API}/access/roles/bob", json={"role": "admin"}, headers=as_caller("root-admin")
    )
    invalid = await client.put(
        f"{API}/access/roles/bob", json={"role": "owner"}, headers=as_caller("root-admin")
    )

    assert denied.status_code == 403
    assert granted.json() == {"identity": "bob", "role": "admin"}
    assert invalid.status_code == 422


@pytest.mark.asyncio
async def test_job_catalog_flow(client: AsyncClient):
    await initialize(client, "root-admin", "alice")
    admin, alice = as_caller("root-admin"), as_caller("alice")

    forbidden = await client.post(f"{API}/jobs", json=LISTING, headers=alice)
    created = await client.post(f"{API}/jobs", json={**LISTING, "id": 99}, headers=admin)
    assert forbidden.status_code == 403
    assert created.status_code == 201
    job_id = created.json()["id"]
    assert job_id == 1

    listings = await client.get(f"{API}/jobs", params={"search": "backend"})
    assert [j["id"] for j in listings.json()] == [job_id]

    applied = await client.post(f"{API}/jobs/{job_id}/apply", headers=alice)
    duplicate = await client.post(f"{API}/jobs/{job_id}/apply", headers=alice)
    assert applied.status_code == 201
    assert applied.json()["status"] == "submitted"
    assert duplicate.status_code == 409
    assert duplicate.json()["error_code"] == "CONFLICT"

    application_id = applied.json()["id"]
    reviewed = await client.patch(
        f"{API}/applications/{application_id}", json={"status": "reviewed"}, headers=admin
    )
    assert reviewed.json()["status"] == "reviewed"

    mine = await client.get(f"{API}/applications/me", headers=alice)
    assert [a["status"] for a in mine.json()] == ["reviewed"]

    by_job = await client.get(f"{API}/jobs/{job_id}/applications", headers=admin)
    assert [a["applicant"] for a in by_job.json()] == ["alice"]

    deleted = await client.delete(f"{API}/jobs/{job_id}", headers=admin)
    assert deleted.json()["success"] is True
    missing = await client.get(f"{API}/jobs/{job_id}")
    assert missing.status_code == 404
    assert missing.json()["error_code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_invalid_listing_is_bad_request(client: AsyncClient):
    await initialize(client, "root-admin")

    response = await client.post(
        f"{API}/jobs",
        json={**LISTING, "min_salary": 10, "max_salary": 1},
        headers=as_caller("root-admin"),
    )

    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_INPUT"


@pytest.mark.asyncio
async def test_profiles(client: AsyncClient):
    await initialize(client, "alice", "bob")
    alice, bob = as_caller("alice"), as_caller("bob")

    empty = await client.get(f"{API}/profiles/me", headers=alice)
    assert empty.status_code == 200
    assert empty.json() is None

    saved = await client.put(
        f"{API}/profiles/me",
        json={"job_profile": JOB_PROFILE, "matrimonial_profile": matrimonial("Alice")},
        headers=alice,
    )
    assert saved.status_code == 200
    await client.put(f"{API}/profiles/me/matrimonial", json=matrimonial("Bob"), headers=bob)

    assert (await client.get(f"{API}/profiles/alice/job", headers=bob)).status_code == 403
    other = await client.get(f"{API}/profiles/alice/matrimonial", headers=bob)
    assert other.json()["name"] == "Alice"

    browse = await client.get(f"{API}/profiles/matrimonial", headers=alice)
    assert [item["identity"] for item in browse.json()] == ["bob"]


@pytest.mark.asyncio
async def test_interest_and_match_flow(client: AsyncClient):
    await initialize(client, "alice", "bob")
    alice, bob = as_caller("alice"), as_caller("bob")
    await client.put(f"{API}/profiles/me/matrimonial", json=matrimonial("Alice"), headers=alice)
    await client.put(f"{API}/profiles/me/matrimonial", json=matrimonial("Bob"), headers=bob)

    sent = await client.post(f"{API}/interests", json={"recipient": "bob"}, headers=alice)
    assert sent.status_code == 201
    interest_id = sent.json()["id"]

    wrong = await client.post(f"{API}/interests/{interest_id}/accept", headers=alice)
    assert wrong.status_code == 403

    accepted = await client.post(f"{API}/interests/{interest_id}/accept", headers=bob)
    assert accepted.json()["status"] == "accepted"

    again = await client.post(f"{API}/interests/{interest_id}/reject", headers=bob)
    assert again.status_code == 409
    assert again.json()["error_code"] == "INVALID_STATE"

    matches = await client.get(f"{API}/matches", headers=alice)
    assert len(matches.json()) == 1
    assert matches.json()[0]["compatibility_score"] == 100

    duplicate = await client.post(
        f"{API}/matches", json={"user2": "bob", "compatibility_score": 50}, headers=alice
    )
    assert duplicate.status_code == 409


@pytest.mark.asyncio
async def test_messages(client: AsyncClient):
    await initialize(client, "alice", "bob", "carol")

    await client.post(f"{API}/messages", json={"to": "bob", "content": "hi"}, headers=as_caller("alice"))
    await client.post(
        f"{API}/messages", json={"to": "alice", "content": "hey"}, headers=as_caller("bob")
    )
    blank = await client.post(
        f"{API}/messages", json={"to": "bob", "content": " "}, headers=as_caller("alice")
    )

    conversation = await client.get(f"{API}/messages/alice", headers=as_caller("bob"))
    snooping = await client.get(f"{API}/messages/alice/bob", headers=as_caller("carol"))

    assert blank.status_code == 400
    assert [m["content"] for m in conversation.json()] == ["hi", "hey"]
    assert snooping.status_code == 403


@pytest.mark.asyncio
async def test_recommendations(client: AsyncClient):
    await initialize(client, "root-admin", "alice", "bob")
    alice = as_caller("alice")
    await client.post(f"{API}/jobs", json=LISTING, headers=as_caller("root-admin"))
    await client.put(f"{API}/profiles/me/job", json=JOB_PROFILE, headers=alice)
    await client.put(f"{API}/profiles/me/matrimonial", json=matrimonial("Alice"), headers=alice)
    await client.put(
        f"{API}/profiles/me/matrimonial", json=matrimonial("Bob"), headers=as_caller("bob")
    )

    response = await client.get(f"{API}/recommendations", headers=alice)
    guest = await client.get(f"{API}/recommendations")

    assert response.status_code == 200
    data = response.json()
    assert data["recommendations"]["jobs"][0]["match_score"] == 75
    assert data["recommendations"]["matches"][0]["identity"] == "bob"
    assert data["explanations"][0] == "location and experience level match"
    assert guest.status_code == 403


@pytest.mark.asyncio
async def test_delete_user(client: AsyncClient):
    await initialize(client, "root-admin", "alice")
    admin = as_caller("root-admin")

    deleted = await client.delete(f"{API}/users/alice", headers=admin)
    missing = await client.delete(f"{API}/users/alice", headers=admin)
    users = await client.get(f"{API}/users", headers=admin)

    assert deleted.status_code == 200
    assert missing.status_code == 404
    assert [u["identity"] for u in users.json()] == ["root-admin"]
