"""Integration tests for UserAccountService: cache-aside reads and follower edges."""

from datetime import timedelta

import pytest

from app.domain.entities.user import UserEntity
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    UserAlreadyExistsException,
    ValidationException,
)
from app.infrastructure.cache.redis_cache import CacheService
from app.infrastructure.cache.user_cache import RedisUserCache
from app.infrastructure.security.password import BcryptPasswordHasher
from app.infrastructure.services.invitation_workflow import InvitationWorkflow
from app.infrastructure.services.user_account_service import UserAccountService
from tests.conftest import FakeRedis


@pytest.fixture
async def fake_redis() -> FakeRedis:
    return FakeRedis()


@pytest.fixture
async def accounts(session_factory, fake_redis: FakeRedis) -> UserAccountService:
    cache_service = CacheService(redis_client=fake_redis)
    await cache_service.connect()
    return UserAccountService(
        session_factory,
        RedisUserCache(cache_service),
        InvitationWorkflow(session_factory),
        BcryptPasswordHasher(),
    )


async def _create(session_factory, username: str, email: str) -> str:
    user = await InvitationWorkflow(session_factory).create_and_invite(
        UserEntity(username=username, email=email, hashed_password="h"),
        f"tok-{username}",
        timedelta(hours=1),
    )
    return user.id


async def test_get_user_populates_cache(session_factory, accounts, fake_redis) -> None:
    user_id = await _create(session_factory, "alice", "a@x.com")
    user = await accounts.get_user(user_id)
    assert user.username == "alice"
    assert f"user-{user_id}" in fake_redis.store
    assert await accounts.get_user(user_id) == user


async def test_missing_user_is_not_cached(accounts, fake_redis) -> None:
    with pytest.raises(ResourceNotFoundException):
        await accounts.get_user("nobody")
    assert fake_redis.store == {}


async def test_update_profile_invalidates_cache(session_factory, accounts, fake_redis) -> None:
    user_id = await _create(session_factory, "alice", "a@x.com")
    await accounts.get_user(user_id)
    updated = await accounts.update_profile(user_id, username="alice2")
    assert updated.username == "alice2"
    assert f"user-{user_id}" not in fake_redis.store
    assert (await accounts.get_user(user_id)).username == "alice2"


async def test_update_profile_to_taken_email_conflicts(session_factory, accounts) -> None:
    user_id = await _create(session_factory, "alice", "a@x.com")
    await _create(session_factory, "bob", "b@x.com")
    with pytest.raises(UserAlreadyExistsException):
        await accounts.update_profile(user_id, email="b@x.com")


async def test_delete_account_removes_user_and_cache(session_factory, accounts, fake_redis) -> None:
    user_id = await _create(session_factory, "alice", "a@x.com")
    await accounts.get_user(user_id)
    await accounts.delete_account(user_id)
    assert fake_redis.store == {}
    with pytest.raises(ResourceNotFoundException):
        await accounts.get_user(user_id)


async def test_follow_and_unfollow(session_factory, accounts) -> None:
    alice = await _create(session_factory, "alice", "a@x.com")
    bob = await _create(session_factory, "bob", "b@x.com")

    await accounts.follow(alice, bob)
    with pytest.raises(ConflictException):
        await accounts.follow(alice, bob)

    await accounts.unfollow(alice, bob)
    with pytest.raises(ResourceNotFoundException):
        await accounts.unfollow(alice, bob)


async def test_follow_unknown_user_or_self(session_factory, accounts) -> None:
    alice = await _create(session_factory, "alice", "a@x.com")
    with pytest.raises(ResourceNotFoundException):
        await accounts.follow("nobody", alice)
    with pytest.raises(ValidationException):
        await accounts.follow(alice, alice)


async def test_assign_role_drops_cached_snapshot(session_factory, accounts, fake_redis) -> None:
    user_id = await _create(session_factory, "mod", "mod@x.com")
    assert (await accounts.get_user(user_id)).role == "user"

    promoted = await accounts.assign_role(user_id, "moderator")
    assert (promoted.role, promoted.role_level) == ("moderator", 2)
    assert f"user-{user_id}" not in fake_redis.store
    assert (await accounts.get_user(user_id)).role == "moderator"
