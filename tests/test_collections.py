"""Tests for collections and shared-entry permissions."""

from datetime import datetime

import pytest

from interne.services.availability import as_utc


@pytest.fixture
def shared(client, auth_headers, other_headers):
    """A collection owned by the auth user that the other user has joined."""
    response = client.post("/api/v1/collections", headers=auth_headers, json={"name": "Reading"})
    assert response.status_code == 201
    collection = response.json()

    joined = client.post(
        "/api/v1/collections/join",
        headers=other_headers,
        json={"invite_code": collection["invite_code"]},
    )
    assert joined.status_code == 200
    return collection


def add_entry(client, headers, collection_id, title="Shared"):
    response = client.post(
        "/api/v1/entries",
        headers=headers,
        json={
            "url": "https://example.com/shared",
            "title": title,
            "duration": 3,
            "interval": "days",
            "collection_id": collection_id,
        },
    )
    assert response.status_code == 201
    return response.json()


def test_create_collection(client, auth_headers):
    """Test creating a collection returns its invite code to the owner."""
    response = client.post("/api/v1/collections", headers=auth_headers, json={"name": " Books "})
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Books"
    assert data["is_owner"] is True
    assert data["member_count"] == 1
    assert data["invite_code"]


def test_create_collection_requires_name(client, auth_headers):
    """Test that a blank collection name is rejected."""
    response = client.post("/api/v1/collections", headers=auth_headers, json={"name": "  "})
    assert response.status_code == 422


def test_join_collection(client, shared, other_headers):
    """Test joining with an invite code; members do not see the code."""
    response = client.get("/api/v1/collections", headers=other_headers)
    assert response.status_code == 200
    collections = response.json()
    assert len(collections) == 1
    assert collections[0]["id"] == shared["id"]
    assert collections[0]["is_owner"] is False
    assert collections[0]["member_count"] == 2
    assert collections[0]["invite_code"] is None


def test_join_twice_is_noop(client, shared, auth_headers, other_headers):
    """Test that rejoining, or the owner joining, adds no members."""
    for headers in (auth_headers, other_headers):
        response = client.post(
            "/api/v1/collections/join",
            headers=headers,
            json={"invite_code": shared["invite_code"]},
        )
        assert response.status_code == 200

    detail = client.get(f"/api/v1/collections/{shared['id']}", headers=auth_headers).json()
    assert [member["id"] for member in detail["members"]] == [other_headers.user_id]
    assert detail["member_count"] == 2


def test_join_invalid_code(client, auth_headers):
    """Test joining with an unknown invite code."""
    response = client.post(
        "/api/v1/collections/join", headers=auth_headers, json={"invite_code": "nope"}
    )
    assert response.status_code == 404


def test_member_sees_shared_entries(client, shared, auth_headers, other_headers):
    """Test that members see entries placed in the collection but cannot edit them."""
    entry = add_entry(client, auth_headers, shared["id"])

    response = client.get(f"/api/v1/entries/{entry['id']}", headers=other_headers)
    assert response.status_code == 200
    assert response.json()["can_edit"] is False

    listing = client.get("/api/v1/entries?filter=all", headers=other_headers).json()
    assert [e["id"] for e in listing] == [entry["id"]]


def test_owner_sees_members_entries(client, shared, auth_headers, other_headers):
    """Test that the collection owner sees entries members add to it."""
    entry = add_entry(client, other_headers, shared["id"], title="From member")

    response = client.get(f"/api/v1/entries/{entry['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["title"] == "From member"


def test_member_cannot_update_or_delete(client, shared, auth_headers, other_headers):
    """Test that sharing grants read access only."""
    entry = add_entry(client, auth_headers, shared["id"])

    response = client.put(
        f"/api/v1/entries/{entry['id']}", headers=other_headers, json={"title": "Hijacked"}
    )
    assert response.status_code == 403

    response = client.delete(f"/api/v1/entries/{entry['id']}", headers=other_headers)
    assert response.status_code == 403

    after = client.get(f"/api/v1/entries/{entry['id']}", headers=auth_headers)
    assert after.status_code == 200
    assert after.json()["title"] == "Shared"
    assert after.json()["updated_at"] == entry["updated_at"]


def test_member_can_visit_shared_entry(client, shared, auth_headers, other_headers):
    """Test that a member marking a shared entry read restarts its cooldown for everyone."""
    entry = add_entry(client, auth_headers, shared["id"])

    response = client.post(f"/api/v1/entries/{entry['id']}/visit", headers=other_headers)
    assert response.status_code == 200

    data = client.get(f"/api/v1/entries/{entry['id']}", headers=auth_headers).json()
    assert data["is_available"] is False
    assert data["visit_count"] == 1


def test_visits_by_owner_and_member_both_kept(
    client, shared, auth_headers, other_headers, clock
):
    """Test that every visit is recorded and the latest one anchors the cooldown."""
    entry = add_entry(client, auth_headers, shared["id"])

    client.post(f"/api/v1/entries/{entry['id']}/visit", headers=auth_headers)
    later = clock.advance(hours=2)
    client.post(f"/api/v1/entries/{entry['id']}/visit", headers=other_headers)

    data = client.get(f"/api/v1/entries/{entry['id']}", headers=auth_headers).json()
    assert data["visit_count"] == 2
    assert as_utc(datetime.fromisoformat(data["dismissed_at"])) == later

    visits = client.get(f"/api/v1/entries/{entry['id']}/visits", headers=other_headers).json()
    assert [v["user_id"] for v in visits] == [other_headers.user_id, auth_headers.user_id]


def test_stranger_cannot_see_shared_entry(client, shared, auth_headers, user_factory, login):
    """Test that non-members never see collection entries."""
    entry = add_entry(client, auth_headers, shared["id"])
    stranger = login(user_factory("Stranger"))

    response = client.get(f"/api/v1/entries/{entry['id']}", headers=stranger)
    assert response.status_code == 404
    response = client.get(f"/api/v1/collections/{shared['id']}", headers=stranger)
    assert response.status_code == 404


def test_cannot_add_entry_to_foreign_collection(client, auth_headers, user_factory, login):
    """Test that entries can only be placed in collections you belong to."""
    collection = client.post(
        "/api/v1/collections", headers=auth_headers, json={"name": "Private"}
    ).json()
    stranger = login(user_factory("Stranger"))

    response = client.post(
        "/api/v1/entries",
        headers=stranger,
        json={
            "url": "https://example.com",
            "title": "Sneaky",
            "duration": 1,
            "interval": "days",
            "collection_id": collection["id"],
        },
    )
    assert response.status_code == 404


def test_member_cannot_manage_collection(client, shared, other_headers):
    """Test that rename, delete and invite rotation are owner-only."""
    collection_id = shared["id"]
    assert (
        client.put(
            f"/api/v1/collections/{collection_id}", headers=other_headers, json={"name": "Mine"}
        ).status_code
        == 403
    )
    response = client.delete(f"/api/v1/collections/{collection_id}", headers=other_headers)
    assert response.status_code == 403
    assert (
        client.post(
            f"/api/v1/collections/{collection_id}/regenerate-invite", headers=other_headers
        ).status_code
        == 403
    )


def test_rename_collection(client, auth_headers):
    """Test renaming a collection."""
    collection = client.post(
        "/api/v1/collections", headers=auth_headers, json={"name": "Old"}
    ).json()
    response = client.put(
        f"/api/v1/collections/{collection['id']}", headers=auth_headers, json={"name": "New"}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "New"


def test_regenerate_invite(client, shared, auth_headers, user_factory, login):
    """Test that a regenerated invite code replaces the old one."""
    response = client.post(
        f"/api/v1/collections/{shared['id']}/regenerate-invite", headers=auth_headers
    )
    assert response.status_code == 200
    new_code = response.json()["invite_code"]
    assert new_code != shared["invite_code"]

    late = login(user_factory("Late"))
    old = client.post(
        "/api/v1/collections/join", headers=late, json={"invite_code": shared["invite_code"]}
    )
    assert old.status_code == 404
    new = client.post("/api/v1/collections/join", headers=late, json={"invite_code": new_code})
    assert new.status_code == 200


def test_leave_collection(client, shared, auth_headers, other_headers):
    """Test that a member who leaves loses access to shared entries."""
    entry = add_entry(client, auth_headers, shared["id"])

    response = client.post(f"/api/v1/collections/{shared['id']}/leave", headers=other_headers)
    assert response.status_code == 204

    assert client.get(f"/api/v1/entries/{entry['id']}", headers=other_headers).status_code == 404
    assert client.get("/api/v1/collections", headers=other_headers).json() == []


def test_owner_cannot_leave(client, shared, auth_headers):
    """Test that the owner cannot leave their own collection."""
    response = client.post(f"/api/v1/collections/{shared['id']}/leave", headers=auth_headers)
    assert response.status_code == 400


def test_remove_member(client, shared, auth_headers, other_headers):
    """Test that the owner can remove a member."""
    response = client.delete(
        f"/api/v1/collections/{shared['id']}/members/{other_headers.user_id}",
        headers=auth_headers,
    )
    assert response.status_code == 204

    detail = client.get(f"/api/v1/collections/{shared['id']}", headers=auth_headers).json()
    assert detail["members"] == []
    assert client.get("/api/v1/collections", headers=other_headers).json() == []


def test_delete_collection_keeps_entries(client, shared, auth_headers, other_headers):
    """Test that deleting a collection makes its entries private, not gone."""
    mine = add_entry(client, auth_headers, shared["id"], title="Mine")
    theirs = add_entry(client, other_headers, shared["id"], title="Theirs")

    response = client.delete(f"/api/v1/collections/{shared['id']}", headers=auth_headers)
    assert response.status_code == 204

    own = client.get(f"/api/v1/entries/{theirs['id']}", headers=other_headers)
    assert own.status_code == 200
    assert own.json()["collection_id"] is None

    assert client.get(f"/api/v1/entries/{theirs['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"/api/v1/entries/{mine['id']}", headers=other_headers).status_code == 404
