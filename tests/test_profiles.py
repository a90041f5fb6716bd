import uuid
from datetime import datetime
from unittest.mock import patch, AsyncMock

import pytest
from fastapi import status

from app.crud.answer import to_user_answer_read
from app.crud.profile import compute_profile_stats, update_display_name
from app.models.answer import Answer
from app.models.post import Post
from app.models.profile import Profile
from app.schemas.answer import AnsweredPost, UserAnswerRead
from app.schemas.enums import FeedScope
from app.schemas.post import PostFeed, PostRead

CREATED = datetime(2025, 2, 14, 8, 0, 0)


def post_read(likes):
    return PostRead(
        id=uuid.uuid4(),
        title="Any good sci-fi?",
        description="Looking for book recommendations.",
        category="Arts",
        likes=likes,
        created_at=CREATED,
    )


def answer_read(likes, title="Any good sci-fi?"):
    return UserAnswerRead(
        id=uuid.uuid4(),
        content="Read The Left Hand of Darkness.",
        likes=likes,
        created_at=CREATED,
        post=AnsweredPost(id=uuid.uuid4(), title=title),
    )


def test_likes_received_counts_posts_and_answers():
    stats = compute_profile_stats([post_read(3), post_read(4)], [answer_read(2)])

    assert stats.total_posts == 2
    assert stats.total_answers == 1
    assert stats.total_likes_received == 9


def test_answer_without_post_falls_back_to_unknown_post():
    answer = Answer(id=uuid.uuid4(), post_id=uuid.uuid4(), content="Orphaned", created_at=CREATED)

    result = to_user_answer_read(answer)

    assert result.post.title == "Unknown Post"
    assert result.post.id is None


def test_answer_carries_its_post_title():
    post = Post(id=uuid.uuid4(), title="Tea or coffee?", description="Settle it.", category="Food")
    answer = Answer(id=uuid.uuid4(), post_id=post.id, content="Tea.", created_at=CREATED, post=post)

    assert to_user_answer_read(answer).post == AnsweredPost(id=post.id, title="Tea or coffee?")


@pytest.mark.asyncio
async def test_profile_page_requires_sign_in(client, mock_db):
    response = await client.get("/api/profiles/me?next=/profile")

    assert response.status_code == status.HTTP_303_SEE_OTHER
    assert response.headers["location"] == "/auth?next=%2Fprofile"
    mock_db.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_profile_page_combines_posts_answers_and_stats(client, auth_headers, user_id):
    profile = Profile(user_id=user_id, display_name="Grace", avatar_url=None)
    feed = PostFeed(posts=[post_read(5)])
    answers = [answer_read(1), answer_read(0)]

    with patch("app.api.profiles.get_profile", new=AsyncMock(return_value=profile)), \
         patch("app.api.profiles.load_feed", new=AsyncMock(return_value=feed)) as mock_feed, \
         patch("app.api.profiles.get_answers_by_user", new=AsyncMock(return_value=answers)):
        response = await client.get("/api/profiles/me", headers=auth_headers)

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["profile"]["display_name"] == "Grace"
    assert body["stats"] == {"total_posts": 1, "total_answers": 2, "total_likes_received": 6}
    assert len(body["answers"]) == 2
    assert mock_feed.await_args.args[2] == FeedScope.PROFILE


@pytest.mark.asyncio
async def test_blank_display_name_is_rejected(client, auth_headers):
    with patch("app.api.profiles.update_display_name", new=AsyncMock()) as mock_update:
        response = await client.put("/api/profiles/me", json={"display_name": "   "}, headers=auth_headers)

    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert response.json()["message"] == "Display name cannot be empty."
    mock_update.assert_not_awaited()


@pytest.mark.asyncio
async def test_display_name_creates_missing_profile(mock_db, user_id):
    with patch("app.crud.profile.get_profile", new=AsyncMock(return_value=None)):
        profile = await update_display_name(mock_db, user_id, "Grace")

    mock_db.add.assert_called_once_with(profile)
    mock_db.commit.assert_awaited_once()
    assert profile.user_id == user_id
    assert profile.display_name == "Grace"


@pytest.mark.asyncio
async def test_display_name_update_keeps_avatar(mock_db, user_id):
    existing = Profile(user_id=user_id, display_name="Old", avatar_url="https://storage.googleapis.com/avatars/a.png")

    with patch("app.crud.profile.get_profile", new=AsyncMock(return_value=existing)):
        profile = await update_display_name(mock_db, user_id, "New")

    assert profile is existing
    assert profile.display_name == "New"
    assert profile.avatar_url == "https://storage.googleapis.com/avatars/a.png"
