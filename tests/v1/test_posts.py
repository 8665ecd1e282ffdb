# mypy: ignore-errors
# tests/v1/test_posts.py
"""Tests for moderator post actions."""

from fastapi import status


def test_pin_post(client, post, creator, auth_headers) -> None:
    """Test pinning a post as the community creator."""
    response = client.patch(
        f"/api/v1/posts/{post.id}/mod",
        json={"action": "toggle_pin"},
        headers=auth_headers(creator),
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["is_pinned"] is True
    assert data["message"] == "Post pinned to community"


def test_non_moderator_cannot_lock(client, post, author, auth_headers) -> None:
    """Test that authors without a role cannot moderate."""
    response = client.patch(
        f"/api/v1/posts/{post.id}/mod",
        json={"action": "toggle_lock"},
        headers=auth_headers(author),
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.json()["detail"] == "Only moderators can perform this action"


def test_unknown_action(client, post, creator, auth_headers) -> None:
    """Test that unknown actions fail validation."""
    response = client.patch(
        f"/api/v1/posts/{post.id}/mod",
        json={"action": "toggle_everything"},
        headers=auth_headers(creator),
    )
    assert response.status_code == 422
