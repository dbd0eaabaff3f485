"""Integration tests for PostRepository (versioned compare-and-swap updates)."""

import asyncio

import pytest

from app.application.dtos.post import PostCreate, PostUpdate
from app.domain.entities.user import UserEntity
from app.domain.exceptions import ResourceNotFoundException, VersionConflictException
from app.infrastructure.persistence.repositories.post_repo import PostRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository


@pytest.fixture
async def author_id(db_session) -> str:
    user = await UserRepository(db_session).create_user(
        UserEntity(username="author", email="author@x.com", hashed_password="h")
    )
    return user.id


def _update(post, **changes) -> PostUpdate:
    fields = {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "tags": list(post.tags),
        "version": post.version,
    }
    fields.update(changes)
    return PostUpdate(**fields)


async def test_new_post_starts_at_version_zero(db_session, author_id: str) -> None:
    repo = PostRepository(db_session)
    post = await repo.create_post(
        PostCreate(title="Hi", content="First", user_id=author_id, tags=["intro"])
    )
    assert post.version == 0
    assert post.tags == ["intro"]
    assert (await repo.get_by_id(post.id)).title == "Hi"


async def test_update_increments_version(db_session, author_id: str) -> None:
    repo = PostRepository(db_session)
    post = await repo.create_post(PostCreate(title="Hi", content="First", user_id=author_id))
    updated = await repo.update_post(_update(post, title="Hello"))
    assert updated.version == 1
    assert updated.title == "Hello"
    assert updated.content == "First"


async def test_stale_version_conflicts(db_session, author_id: str) -> None:
    """Two writers load version 0; the second write loses."""
    repo = PostRepository(db_session)
    post = await repo.create_post(PostCreate(title="Hi", content="First", user_id=author_id))
    await repo.update_post(_update(post, title="Writer A"))
    with pytest.raises(VersionConflictException):
        await repo.update_post(_update(post, title="Writer B"))
    current = await repo.get_by_id(post.id)
    assert current.title == "Writer A"
    assert current.version == 1


async def test_update_of_missing_post_is_not_found(db_session) -> None:
    repo = PostRepository(db_session)
    with pytest.raises(ResourceNotFoundException):
        await repo.update_post(
            PostUpdate(id="missing", title="t", content="c", tags=[], version=0)
        )


async def test_list_and_delete(db_session, author_id: str) -> None:
    repo = PostRepository(db_session)
    first = await repo.create_post(PostCreate(title="1", content="a", user_id=author_id))
    await repo.create_post(PostCreate(title="2", content="b", user_id=author_id))
    assert len(await repo.list_posts(user_id=author_id)) == 2
    assert await repo.list_posts(user_id="nobody") == []

    await repo.delete_post(first.id)
    with pytest.raises(ResourceNotFoundException):
        await repo.get_by_id(first.id)
    with pytest.raises(ResourceNotFoundException):
        await repo.delete_post(first.id)


async def test_concurrent_writers_from_same_version_exactly_one_wins(session_factory) -> None:
    """Two sessions read version 0 and write at the same time; one write is rejected."""
    async with session_factory() as session, session.begin():
        author = await UserRepository(session).create_user(
            UserEntity(username="racer", email="racer@x.com", hashed_password="h")
        )
        post = await PostRepository(session).create_post(
            PostCreate(title="Hi", content="First", user_id=author.id)
        )

    both_read = asyncio.Barrier(2)

    async def writer(title: str):
        async with session_factory() as session:
            repo = PostRepository(session)
            seen = await repo.get_by_id(post.id)
            assert seen.version == 0
            await both_read.wait()
            updated = await repo.update_post(_update(seen, title=title))
            await session.commit()
            return updated

    outcomes = await asyncio.gather(writer("A"), writer("B"), return_exceptions=True)

    winners = [o for o in outcomes if not isinstance(o, BaseException)]
    losers = [o for o in outcomes if isinstance(o, BaseException)]
    assert len(winners) == 1
    assert winners[0].version == 1
    assert len(losers) == 1
    assert isinstance(losers[0], VersionConflictException)

    async with session_factory() as session:
        stored = await PostRepository(session).get_by_id(post.id)
    assert stored.version == 1
    assert stored.title == winners[0].title
