import uuid
from datetime import datetime, timedelta
from unittest.mock import patch, AsyncMock

import pytest
from fastapi import status

from app.crud.post import filter_posts_by_title, load_feed
from app.models.answer import Answer
from app.models.post import Post
from app.models.profile import Profile
from app.schemas.auth import AuthUser
from app.schemas.enums import FeedScope, InteractionType
from app.schemas.post import PostRead

NOW = datetime(2025, 5, 20, 18, 0, 0)


def post_read(title, minutes_ago=0):
    return PostRead(
        id=uuid.uuid4(),
        title=title,
        description=f"About {title}",
        category="Other",
        created_at=NOW - timedelta(minutes=minutes_ago),
    )


def stored_posts(*titles, owner_id=None):
    return [
        Post(
            id=uuid.uuid4(),
            user_id=owner_id,
            title=title,
            description=f"About {title}",
            category="Other",
            created_at=NOW - timedelta(minutes=index),
        )
        for index, title in enumerate(titles)
    ]


def test_search_matches_titles_case_insensitively_in_order():
    posts = [post_read("Alpha"), post_read("Beta", 1), post_read("Alphabet", 2)]

    result = filter_posts_by_title(posts, "alpha")

    assert [post.title for post in result] == ["Alpha", "Alphabet"]


@pytest.mark.parametrize("query", [None, "", "   "])
def test_blank_search_keeps_everything(query):
    posts = [post_read("Alpha"), post_read("Beta", 1)]

    assert filter_posts_by_title(posts, query) == posts


def test_search_keeps_spaces_in_the_query():
    posts = [post_read("Alpha Centauri"), post_read("Beta", 1), post_read("Alphabet", 2)]

    assert [post.title for post in filter_posts_by_title(posts, "ALPHA ")] == ["Alpha Centauri"]


@pytest.mark.asyncio
async def test_posts_endpoint_filters_by_query(client):
    with patch("app.crud.post.list_posts", new=AsyncMock(return_value=stored_posts("Alpha", "Beta", "Alphabet"))), \
         patch("app.crud.post.get_profiles_map", new=AsyncMock(return_value={})):
        response = await client.get("/api/posts?q=alpha")

    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert [post["title"] for post in body["posts"]] == ["Alpha", "Alphabet"]
    assert body["query"] == "alpha"
    assert body["interactions"] == {}


@pytest.mark.asyncio
async def test_feed_attaches_authors_and_user_interactions(mock_db):
    author_id, viewer_id = uuid.uuid4(), uuid.uuid4()
    posts = stored_posts("Alpha", owner_id=author_id)
    posts[0].answers = [
        Answer(id=uuid.uuid4(), post_id=posts[0].id, user_id=None, content="Anonymous reply", created_at=NOW)
    ]
    profiles = {author_id: Profile(user_id=author_id, display_name="Ada", avatar_url=None)}
    post_interactions = {str(posts[0].id): InteractionType.LIKE}

    with patch("app.crud.post.list_posts", new=AsyncMock(return_value=posts)), \
         patch("app.crud.post.get_profiles_map", new=AsyncMock(return_value=profiles)), \
         patch("app.crud.post.get_post_interactions", new=AsyncMock(return_value=post_interactions)), \
         patch("app.crud.post.get_answer_interactions", new=AsyncMock(return_value={})) as mock_answers:
        feed = await load_feed(mock_db, AuthUser(id=viewer_id), FeedScope.ALL)

    assert feed.posts[0].author_name == "Ada"
    assert feed.posts[0].answers[0].author_name is None
    assert feed.interactions == post_interactions
    assert mock_answers.await_args.args[2] == [posts[0].answers[0].id]


@pytest.mark.asyncio
async def test_profile_feed_without_user_is_empty(mock_db):
    with patch("app.crud.post.get_profiles_map", new=AsyncMock(return_value={})):
        feed = await load_feed(mock_db, None, FeedScope.PROFILE)

    assert feed.posts == []
    mock_db.execute.assert_not_awaited()
