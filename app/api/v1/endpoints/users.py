"""Users API: activation, profile (cache-aside read), follow/unfollow."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from app.api.v1.dependencies import (
    get_current_user,
    get_registration_service,
    get_user_account_service,
)
from app.application.dtos.user import UserResult
from app.application.services.registration_service import RegistrationService
from app.domain.exceptions import AuthorizationException
from app.infrastructure.services.user_account_service import UserAccountService
from app.schemas.user import UserResponse, UserUpdate

router = APIRouter()


def _require_self(user_id: str, current_user: UserResult, action: str) -> None:
    if current_user.id != user_id:
        raise AuthorizationException("user", action)


@router.put("/activate/{token}", status_code=204)
async def activate_user(
    token: str,
    registration: Annotated[RegistrationService, Depends(get_registration_service)],
) -> Response:
    """Redeem an invitation token. 404 for unknown, expired or already-used tokens."""
    await registration.activate(token)
    return Response(status_code=204)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    accounts: Annotated[UserAccountService, Depends(get_user_account_service)],
):
    """Return a user profile (served from the user cache when warm)."""
    user = await accounts.get_user(user_id)
    return UserResponse.model_validate(user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    accounts: Annotated[UserAccountService, Depends(get_user_account_service)],
):
    """Update own username, email and/or password."""
    _require_self(user_id, current_user, "update")
    updated = await accounts.update_profile(
        user_id,
        username=body.username,
        email=str(body.email) if body.email is not None else None,
        password=body.password,
    )
    return UserResponse.model_validate(updated)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    accounts: Annotated[UserAccountService, Depends(get_user_account_service)],
) -> Response:
    """Delete own account."""
    _require_self(user_id, current_user, "delete")
    await accounts.delete_account(user_id)
    return Response(status_code=204)


@router.put("/{user_id}/follow", status_code=204)
async def follow_user(
    user_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    accounts: Annotated[UserAccountService, Depends(get_user_account_service)],
) -> Response:
    """Follow user_id as the current user. 409 if already following."""
    await accounts.follow(user_id, current_user.id)
    return Response(status_code=204)


@router.put("/{user_id}/unfollow", status_code=204)
async def unfollow_user(
    user_id: str,
    current_user: Annotated[UserResult, Depends(get_current_user)],
    accounts: Annotated[UserAccountService, Depends(get_user_account_service)],
) -> Response:
    """Stop following user_id. 404 if not following."""
    await accounts.unfollow(user_id, current_user.id)
    return Response(status_code=204)
