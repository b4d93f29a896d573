"""Request/response schemas for auth endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.schemas.users import check_password_bytes, strip_username


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN, description="Username"
    )
    password: str = Field(
        ..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN, description="Password"
    )

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return strip_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_bytes(v)


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Seconds until the token expires")


class AdminPermissionsOut(BaseModel):
    super_admin: bool
    manage_users: bool


class AdminOut(BaseModel):
    """Authenticated admin record (no password hash)."""

    id: str
    username: str
    email: str
    permissions: AdminPermissionsOut
    created_at: datetime | None = None
