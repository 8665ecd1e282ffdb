# mypy: ignore-errors
# tests/v1/test_communities.py
"""Tests for community role, roster, mod-log and settings endpoints."""

from fastapi import status


def test_creator_role(client, community, creator, auth_headers) -> None:
    """Test that the creator resolves with every capability."""
    response = client.get(
        f"/api/v1/communities/{community.id}/role",
        headers=auth_headers(creator),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["role"] == "creator"
    assert data["can_edit_settings"] is True


def test_outsider_role(client, community, make_user, auth_headers) -> None:
    """Test that an unrelated user has no capabilities."""
    data = client.get(
        f"/api/v1/communities/{community.id}/role",
        headers=auth_headers(make_user()),
    ).json()
    assert data["role"] == "none"
    assert data["is_mod"] is False


def test_add_and_list_moderators(client, community, creator, make_user, auth_headers) -> None:
    """Test appointing a moderator and reading the roster."""
    mod = make_user("helper")
    response = client.post(
        f"/api/v1/communities/{community.id}/moderators",
        json={"username": "helper"},
        headers=auth_headers(creator),
    )
    assert response.status_code == status.HTTP_201_CREATED

    roster = client.get(f"/api/v1/communities/{community.id}/moderators").json()["moderators"]
    assert [m["role"] for m in roster] == ["creator", "moderator"]
    assert roster[1]["user_id"] == mod.id


def test_moderator_cannot_appoint(client, community, creator, make_user, auth_headers) -> None:
    """Test that plain moderators cannot add others."""
    mod = make_user("mod1")
    make_user("hopeful")
    client.post(
        f"/api/v1/communities/{community.id}/moderators",
        json={"username": "mod1"},
        headers=auth_headers(creator),
    )
    response = client.post(
        f"/api/v1/communities/{community.id}/moderators",
        json={"username": "hopeful"},
        headers=auth_headers(mod),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_remove_moderator(client, community, creator, make_user, auth_headers) -> None:
    """Test removing a moderator assignment."""
    make_user("temp")
    created = client.post(
        f"/api/v1/communities/{community.id}/moderators",
        json={"username": "temp"},
        headers=auth_headers(creator),
    ).json()
    response = client.delete(
        f"/api/v1/communities/{community.id}/moderators/{created['id']}",
        headers=auth_headers(creator),
    )
    assert response.status_code == status.HTTP_200_OK
    roster = client.get(f"/api/v1/communities/{community.id}/moderators").json()["moderators"]
    assert len(roster) == 1


def test_modlog_is_public_only(client, community, creator, make_user, post, auth_headers) -> None:
    """Test that private report entries never reach the public log."""
    client.post(
        f"/api/v1/posts/{post.id}/report",
        json={"reason": "Spam"},
        headers=auth_headers(make_user()),
    )
    client.patch(
        f"/api/v1/posts/{post.id}/mod",
        json={"action": "toggle_pin"},
        headers=auth_headers(creator),
    )
    response = client.get(f"/api/v1/communities/{community.id}/modlog", params={"limit": 10})
    assert response.status_code == status.HTTP_200_OK
    actions = [a["action"] for a in response.json()["actions"]]
    assert actions == ["pin_post"]


def test_modlog_unknown_community(client) -> None:
    """Test the mod log of a missing community."""
    response = client.get("/api/v1/communities/99999/modlog")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_edit_settings(client, community, creator, make_user, auth_headers) -> None:
    """Test that only the creator may edit settings."""
    response = client.patch(
        f"/api/v1/communities/{community.id}/settings",
        json={"description": "Fresh description"},
        headers=auth_headers(creator),
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["description"] == "Fresh description"

    denied = client.patch(
        f"/api/v1/communities/{community.id}/settings",
        json={"name": "Mine now"},
        headers=auth_headers(make_user()),
    )
    assert denied.status_code == status.HTTP_403_FORBIDDEN
