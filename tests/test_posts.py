import uuid
from datetime import datetime
from unittest.mock import patch, AsyncMock, MagicMock

import pytest
from fastapi import status

from app.core.exceptions import CustomHTTPException
from app.crud.post import create_post, update_post, delete_post
from app.models.post import Post
from app.schemas.auth import AuthUser
from app.schemas.enums import Category, FeedScope
from app.schemas.post import PostCreate, PostFeed, PostUpdate, REQUIRED_FIELDS_MESSAGE


VALID_POST = {
    "title": "How do tides work?",
    "description": "I never understood why there are two a day.",
    "category": "Science",
}


def stored_post(owner_id, **overrides):
    fields = dict(
        id=uuid.uuid4(),
        user_id=owner_id,
        title="Original title",
        description="Original description",
        category="Education",
        likes=5,
        dislikes=2,
        image_url="https://storage.googleapis.com/post-images/abc.png",
        created_at=datetime(2025, 1, 1, 12, 0, 0),
    )
    fields.update(overrides)
    return Post(**fields)


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["title", "description", "category"])
async def test_create_post_rejects_blank_required_field(client, auth_headers, mock_db, field):
    payload = {**VALID_POST, field: "   "}

    with patch("app.api.posts.create_post", new=AsyncMock()) as mock_create, \
         patch("app.api.posts.load_feed", new=AsyncMock(return_value=PostFeed())):
        response = await client.post("/api/posts", json=payload, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["message"] == REQUIRED_FIELDS_MESSAGE
    mock_create.assert_not_awaited()
    mock_db.add.assert_not_called()


@pytest.mark.asyncio
async def test_create_post_requires_sign_in(client, mock_db):
    with patch("app.api.posts.create_post", new=AsyncMock()) as mock_create:
        response = await client.post(
            "/api/posts",
            json=VALID_POST,
            headers={"referer": "http://test/posts"}
        )

    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/auth?next=%2Fposts"
    mock_create.assert_not_awaited()
    mock_db.execute.assert_not_awaited()
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_post_returns_refreshed_feed(client, auth_headers, user_id):
    feed = PostFeed()
    with patch("app.api.posts.create_post", new=AsyncMock()) as mock_create, \
         patch("app.api.posts.load_feed", new=AsyncMock(return_value=feed)) as mock_feed:
        response = await client.post("/api/posts", json=VALID_POST, headers=auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["notice"]["title"] == "Post created!"
    assert body["feed"]["posts"] == []

    post_in = mock_create.await_args.args[1]
    assert post_in.category == Category.SCIENCE
    assert mock_create.await_args.args[2].id == user_id
    assert mock_feed.await_args.args[2] == FeedScope.ALL


@pytest.mark.asyncio
async def test_create_post_stores_trimmed_values(mock_db, user_id):
    post_in = PostCreate(title="  Tides  ", description=" Why two a day? ", category="Science", image_url="  ")

    post = await create_post(mock_db, post_in, AuthUser(id=user_id))

    mock_db.add.assert_called_once_with(post)
    mock_db.commit.assert_awaited_once()
    assert post.title == "Tides"
    assert post.description == "Why two a day?"
    assert post.category == "Science"
    assert post.image_url is None
    assert post.user_id == user_id
    assert post.likes == 0 and post.dislikes == 0


@pytest.mark.asyncio
async def test_create_post_failure_is_reported(mock_db, user_id):
    mock_db.commit.side_effect = Exception("connection reset")
    post_in = PostCreate(**VALID_POST)

    with pytest.raises(CustomHTTPException) as exc_info:
        await create_post(mock_db, post_in, AuthUser(id=user_id))

    assert exc_info.value.status_code == 500
    assert exc_info.value.detail == "Failed to create post. Please try again."
    mock_db.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_post_changes_only_submitted_fields(mock_db, user_id):
    post = stored_post(user_id)
    mock_db.get.return_value = post

    await update_post(
        mock_db,
        post.id,
        PostUpdate(title=" New title ", category="Technology"),
        AuthUser(id=user_id)
    )

    assert post.title == "New title"
    assert post.category == "Technology"
    assert post.description == "Original description"
    assert post.likes == 5
    assert post.dislikes == 2
    assert post.image_url == "https://storage.googleapis.com/post-images/abc.png"
    mock_db.commit.assert_awaited_once()


def test_update_rejects_blank_values():
    with pytest.raises(ValueError):
        PostUpdate(title="   ")


@pytest.mark.asyncio
async def test_update_post_by_someone_else_is_forbidden(mock_db, user_id):
    post = stored_post(uuid.uuid4())
    mock_db.get.return_value = post

    with pytest.raises(CustomHTTPException) as exc_info:
        await update_post(mock_db, post.id, PostUpdate(title="Hijacked"), AuthUser(id=user_id))

    assert exc_info.value.status_code == 403
    assert post.title == "Original title"
    mock_db.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_missing_post_is_not_found(mock_db, user_id):
    mock_db.get.return_value = None

    with pytest.raises(CustomHTTPException) as exc_info:
        await update_post(mock_db, uuid.uuid4(), PostUpdate(title="Anything"), AuthUser(id=user_id))

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Post not found"


@pytest.mark.asyncio
async def test_edit_endpoint_refreshes_profile_feed(client, auth_headers):
    post_id = uuid.uuid4()
    with patch("app.api.posts.update_post", new=AsyncMock()) as mock_update, \
         patch("app.api.posts.load_feed", new=AsyncMock(return_value=PostFeed())) as mock_feed:
        response = await client.put(
            f"/api/posts/{post_id}",
            json={"description": "Clarified question"},
            headers=auth_headers
        )

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["notice"]["title"] == "Post updated"
    post_in = mock_update.await_args.args[2]
    assert post_in.model_dump(exclude_unset=True) == {"description": "Clarified question"}
    assert mock_feed.await_args.args[2] == FeedScope.PROFILE


@pytest.mark.asyncio
async def test_delete_post_removes_row_and_image(mock_db, user_id):
    post = stored_post(user_id)
    mock_db.get.return_value = post

    with patch("app.crud.post.delete_file", new=AsyncMock(return_value=True)) as mock_delete_file:
        await delete_post(mock_db, post.id, AuthUser(id=user_id))

    mock_db.delete.assert_awaited_once_with(post)
    mock_db.commit.assert_awaited_once()
    mock_delete_file.assert_awaited_once_with("https://storage.googleapis.com/post-images/abc.png")


@pytest.mark.asyncio
async def test_delete_endpoint_requires_sign_in(client, mock_db):
    with patch("app.api.posts.delete_post", new=AsyncMock()) as mock_delete:
        response = await client.delete(f"/api/posts/{uuid.uuid4()}")

    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"].startswith("/auth?next=")
    mock_delete.assert_not_awaited()
    mock_db.get.assert_not_awaited()
