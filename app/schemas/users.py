"""Request/response schemas for user endpoints."""

from datetime import datetime

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    password_too_long,
)


def strip_username(v: str | None) -> str | None:
    if v is None:
        return None
    v = v.strip()
    if not v:
        raise ValueError("username is required")
    return v


def check_password_bytes(v: str | None) -> str | None:
    if v is not None and password_too_long(v):
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes")
    return v


class UserCreate(BaseModel):
    """Body for admin-panel creation and public registration."""

    username: str = Field(..., min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    email: EmailStr

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        return strip_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_bytes(v)


class UserSettingsUpdate(BaseModel):
    is_askable: bool | None = None
    is_viewable: bool | None = None


class BanStatusUpdate(BaseModel):
    """Only is_banned is honored; banned_by and ban_date are set by the server."""

    is_banned: bool = True


class UserUpdate(BaseModel):
    """Partial update; omitted fields are left unchanged."""

    model_config = ConfigDict(extra="ignore")

    username: str | None = Field(default=None, min_length=USERNAME_MIN_LEN, max_length=USERNAME_MAX_LEN)
    password: str | None = Field(default=None, min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    email: EmailStr | None = None
    profile_img_url: AnyHttpUrl | None = None
    settings: UserSettingsUpdate | None = None
    ban_status: BanStatusUpdate | None = None

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str | None) -> str | None:
        return strip_username(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return check_password_bytes(v)


class VerifyEmailRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=255)


class UserSettingsOut(BaseModel):
    is_askable: bool
    is_viewable: bool


class BanStatusOut(BaseModel):
    is_banned: bool
    banned_by: str | None = None
    ban_date: datetime | None = None


class UserOut(BaseModel):
    """Full user record as seen by its owner or a user manager (no secrets)."""

    id: str
    username: str
    email: str
    profile_img_url: str
    settings: UserSettingsOut
    ban_status: BanStatusOut
    is_email_confirmed: bool
    created_at: datetime | None = None


class UserProfile(BaseModel):
    """Public profile."""

    username: str
    profile_img_url: str
    is_askable: bool


class MessageResponse(BaseModel):
    message: str
