"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request body for public registration."""

    username: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128, description="Password (min 8 characters)")


class RegisterResponse(BaseModel):
    """Invitation token returned once after registration (also sent by email)."""

    token: str
    user_id: str


class LoginRequest(BaseModel):
    """Request body for exchanging credentials for a bearer token."""

    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
