"""Integration tests for RoleRepository and role assignment on users."""

import pytest

from app.domain.entities.user import UserEntity
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.user_repo import UserRepository


async def test_built_in_roles_are_ordered_by_level(db_session) -> None:
    roles = await RoleRepository(db_session).list_roles()
    assert [(r.name, r.level) for r in roles] == [("user", 1), ("moderator", 2), ("admin", 3)]


async def test_ensure_defaults_is_idempotent(db_session) -> None:
    assert await RoleRepository(db_session).ensure_defaults() == 0


async def test_unknown_role_is_not_found(db_session) -> None:
    with pytest.raises(ResourceNotFoundException):
        await RoleRepository(db_session).get_by_name("superuser")


async def test_new_user_gets_user_role(db_session) -> None:
    created = await UserRepository(db_session).create_user(
        UserEntity(username="alice", email="a@x.com", hashed_password="h")
    )
    assert (created.role, created.role_level) == ("user", 1)


async def test_assign_role_changes_level(db_session) -> None:
    repo = UserRepository(db_session)
    created = await repo.create_user(
        UserEntity(username="alice", email="a@x.com", hashed_password="h")
    )
    promoted = await repo.assign_role(created.id, "admin")
    assert (promoted.role, promoted.role_level) == ("admin", 3)
    assert (await repo.get_by_id(created.id)).role == "admin"
    with pytest.raises(ResourceNotFoundException):
        await repo.assign_role(created.id, "superuser")
