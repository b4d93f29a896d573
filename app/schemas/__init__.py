"""Pydantic request/response schemas."""

from app.schemas.auth import AdminOut, LoginRequest, TokenResponse
from app.schemas.errors import ErrorResponse
from app.schemas.health import HealthResponse
from app.schemas.users import (
    MessageResponse,
    UserCreate,
    UserOut,
    UserProfile,
    UserUpdate,
    VerifyEmailRequest,
)

__all__ = [
    "AdminOut",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "TokenResponse",
    "UserCreate",
    "UserOut",
    "UserProfile",
    "UserUpdate",
    "VerifyEmailRequest",
]
