"""Authentication API: registration (invitation flow) and token issuance.

Uses only injected dependencies; no manual repo or service construction.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_auth_service, get_registration_service
from app.application.services.auth_service import AuthService
from app.application.services.registration_service import RegistrationService
from app.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse

router = APIRouter()


@router.post("/user", response_model=RegisterResponse, status_code=201)
async def register_user(
    body: RegisterRequest,
    registration: Annotated[RegistrationService, Depends(get_registration_service)],
):
    """Register a new (inactive) user and email an activation link.

    Returns the plaintext invitation token. 409 when the username or email is
    taken; 502 when the welcome email could not be sent (nothing is kept).
    """
    result = await registration.register(
        username=body.username,
        email=str(body.email),
        password=body.password,
    )
    return RegisterResponse(token=result.token, user_id=result.user_id)


@router.post("/token", response_model=TokenResponse, status_code=201)
async def create_token(
    body: LoginRequest,
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """Exchange email and password for a bearer token.

    Wrong email, wrong password and inactive account all return the same 401.
    """
    result = await auth.login(str(body.email), body.password)
    return TokenResponse(access_token=result.access_token, token_type=result.token_type)
