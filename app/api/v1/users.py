"""User endpoints: listing, public profiles, registration, email confirmation, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import ERROR_RESPONSES, get_caller, get_current_admin
from app.core.database import get_db
from app.core.ids import require_valid_id
from app.core.security import TokenService, get_token_service
from app.models import Admin
from app.schemas.errors import ErrorResponse
from app.schemas.users import (
    MessageResponse,
    UserCreate,
    UserOut,
    UserProfile,
    UserUpdate,
    VerifyEmailRequest,
)
from app.services import users as user_store
from app.services.authorization import Action, Caller, require

router = APIRouter()

USER_REGISTERED_SUCCESSFULLY = "User registered successfully."
USER_CREATED_SUCCESSFULLY = "User created successfully."
EMAIL_CONFIRMED_SUCCESSFULLY = "Email confirmed successfully."


@router.get("", response_model=list[UserOut], responses=ERROR_RESPONSES)
def list_users(
    admin: Annotated[Admin, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
) -> list[UserOut]:
    """List all users (super admins and user managers only)."""
    require(Caller.from_admin(admin), Action.LIST_USERS)
    return [user_store.user_to_out(u) for u in user_store.list_users(db)]


@router.get(
    "/profile/{username}",
    response_model=UserProfile,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def read_profile(
    username: str,
    db: Annotated[Session, Depends(get_db)],
) -> UserProfile:
    """Public profile. Banned and hidden users are reported as not found."""
    return user_store.get_public_profile(db, username)


@router.get("/{user_id}", response_model=UserOut, responses=ERROR_RESPONSES)
def read_user(
    user_id: str,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Full user record for user managers or the account owner."""
    user_id = require_valid_id(user_id)
    require(caller, Action.READ_USER, user_id)
    return user_store.user_to_out(user_store.get_user_or_invalid_id(db, user_id))


@router.post("", response_model=MessageResponse, responses=ERROR_RESPONSES)
def create_user(
    body: UserCreate,
    admin: Annotated[Admin, Depends(get_current_admin)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> MessageResponse:
    """Create a user from the admin panel."""
    require(Caller.from_admin(admin), Action.CREATE_USER)
    user_store.create_user(db, tokens, body)
    return MessageResponse(message=USER_CREATED_SUCCESSFULLY)


@router.post("/register", response_model=MessageResponse, responses=ERROR_RESPONSES)
def register_user(
    body: UserCreate,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> MessageResponse:
    """Public self-registration. The account starts with an unconfirmed email."""
    user_store.create_user(db, tokens, body)
    return MessageResponse(message=USER_REGISTERED_SUCCESSFULLY)


@router.post("/verify/{user_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
def verify_email(
    user_id: str,
    body: VerifyEmailRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> MessageResponse:
    """Confirm a user's email with the token issued at registration or email change."""
    user_id = require_valid_id(user_id)
    user = user_store.get_user_or_invalid_id(db, user_id)
    user_store.confirm_email(db, tokens, user, body.token)
    return MessageResponse(message=EMAIL_CONFIRMED_SUCCESSFULLY)


@router.put("/{user_id}", response_model=UserOut, responses=ERROR_RESPONSES)
def update_user(
    user_id: str,
    body: UserUpdate,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> UserOut:
    """
    Update any subset of username, password, email, profile_img_url and settings.
    ban_status can only be changed by admins.
    """
    user_id = require_valid_id(user_id)
    require(caller, Action.UPDATE_USER, user_id)
    if body.ban_status is not None:
        require(caller, Action.UPDATE_BAN_STATUS, user_id)

    user = user_store.get_user_or_invalid_id(db, user_id)
    updated = user_store.update_user(
        db,
        tokens,
        user,
        body,
        acting_admin_id=caller.id if caller.is_admin else None,
    )
    return user_store.user_to_out(updated)


@router.delete("/{user_id}", response_model=UserOut, responses=ERROR_RESPONSES)
def delete_user(
    user_id: str,
    caller: Annotated[Caller, Depends(get_caller)],
    db: Annotated[Session, Depends(get_db)],
) -> UserOut:
    """Delete a user (user managers or the account owner); returns the deleted record."""
    user_id = require_valid_id(user_id)
    require(caller, Action.DELETE_USER, user_id)
    user = user_store.get_user_or_invalid_id(db, user_id)
    return user_store.delete_user(db, user)
