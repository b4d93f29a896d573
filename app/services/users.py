"""User store operations: create, read, update, delete, email confirmation."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    EmailAlreadyConfirmed,
    EmailInUse,
    EmailTokenMismatch,
    InvalidId,
    NotFound,
    UsernameInUse,
)
from app.core.ids import new_id
from app.core.security import TokenService, hash_password
from app.models import User
from app.schemas.users import (
    BanStatusOut,
    UserCreate,
    UserOut,
    UserProfile,
    UserSettingsOut,
    UserUpdate,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def user_to_out(user: User) -> UserOut:
    """Serialize a user without password hash or confirmation token."""
    return UserOut(
        id=user.id,
        username=user.username,
        email=user.email,
        profile_img_url=user.profile_img_url or "",
        settings=UserSettingsOut(is_askable=user.is_askable, is_viewable=user.is_viewable),
        ban_status=BanStatusOut(
            is_banned=user.is_banned,
            banned_by=user.banned_by,
            ban_date=user.ban_date,
        ),
        is_email_confirmed=user.is_email_confirmed,
        created_at=user.created_at,
    )


def get_user(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def get_user_or_invalid_id(db: Session, user_id: str) -> User:
    """Look up a user by an already-validated id; a missing user is INVALID_ID."""
    user = get_user(db, user_id)
    if user is None:
        raise InvalidId()
    return user


def list_users(db: Session) -> list[User]:
    return db.query(User).order_by(User.created_at, User.username).all()


def get_public_profile(db: Session, username: str) -> UserProfile:
    """Public view of a user; banned, hidden and missing users all look the same."""
    user = db.query(User).filter(User.username == username).first()
    if user is None or user.is_banned or not user.is_viewable:
        raise NotFound()
    return UserProfile(
        username=user.username,
        profile_img_url=user.profile_img_url or "",
        is_askable=user.is_askable,
    )


def _ensure_unique(
    db: Session,
    username: str | None = None,
    email: str | None = None,
    exclude_id: str | None = None,
) -> None:
    if username is not None:
        q = db.query(User.id).filter(User.username == username)
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first() is not None:
            raise UsernameInUse()
    if email is not None:
        q = db.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        if q.first() is not None:
            raise EmailInUse()


def _commit_unique(db: Session, username: str | None, email: str | None, exclude_id: str | None) -> None:
    """Commit; a unique index violation from a concurrent writer becomes a Conflict."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Uniqueness race lost on commit", extra={"user_id": exclude_id})
        _ensure_unique(db, username=username, email=email, exclude_id=exclude_id)
        # Neither value is taken now; report the username, which is checked first.
        raise UsernameInUse() from e


def create_user(db: Session, tokens: TokenService, body: UserCreate) -> User:
    """Insert a new unconfirmed user with a fresh email confirmation token."""
    email = normalize_email(body.email)
    _ensure_unique(db, username=body.username, email=email)

    user = User(
        id=new_id(),
        username=body.username,
        email=email,
        password_hash=hash_password(body.password),
    )
    db.add(user)
    user.email_confirmation_token = tokens.issue_email_verification_token(user.id)
    user.email_confirmation_sent_at = datetime.now(UTC)
    _commit_unique(db, body.username, email, exclude_id=None)
    db.refresh(user)

    logger.info("User created", extra={"user_id": user.id})
    return user


def update_user(
    db: Session,
    tokens: TokenService,
    user: User,
    body: UserUpdate,
    acting_admin_id: str | None = None,
) -> User:
    """
    Apply a partial update. Changing the email resets confirmation and issues a
    new token. ban_status must only be passed after the caller was authorized
    to change it; acting_admin_id is recorded as banned_by.
    """
    username = body.username if body.username and body.username != user.username else None
    email = normalize_email(body.email) if body.email else None
    if email == user.email:
        email = None
    _ensure_unique(db, username=username, email=email, exclude_id=user.id)

    if username is not None:
        user.username = username
    if email is not None:
        user.email = email
        user.is_email_confirmed = False
        user.email_confirmation_token = tokens.issue_email_verification_token(user.id)
        user.email_confirmation_sent_at = datetime.now(UTC)
    if body.password:
        user.password_hash = hash_password(body.password)
    if body.profile_img_url is not None:
        user.profile_img_url = str(body.profile_img_url)
    if body.settings is not None:
        if body.settings.is_askable is not None:
            user.is_askable = body.settings.is_askable
        if body.settings.is_viewable is not None:
            user.is_viewable = body.settings.is_viewable
    if body.ban_status is not None:
        if body.ban_status.is_banned:
            user.is_banned = True
            user.banned_by = acting_admin_id
            user.ban_date = datetime.now(UTC)
            logger.info("User banned", extra={"user_id": user.id, "admin_id": acting_admin_id})
        else:
            user.is_banned = False
            user.banned_by = None
            user.ban_date = None
            logger.info("User unbanned", extra={"user_id": user.id, "admin_id": acting_admin_id})

    _commit_unique(db, username, email, exclude_id=user.id)
    db.refresh(user)
    logger.info("User updated", extra={"user_id": user.id})
    return user


def delete_user(db: Session, user: User) -> UserOut:
    """Delete the user and return the record as it was."""
    snapshot = user_to_out(user)
    db.delete(user)
    db.commit()
    logger.info("User deleted", extra={"user_id": snapshot.id})
    return snapshot


def confirm_email(db: Session, tokens: TokenService, user: User, token: str) -> None:
    """Mark the email confirmed when token matches the stored one, then clear it."""
    if user.is_email_confirmed:
        raise EmailAlreadyConfirmed()
    if not tokens.email_token_matches(user.email_confirmation_token, token):
        raise EmailTokenMismatch()
    if tokens.email_token_expired(user.email_confirmation_sent_at):
        raise EmailTokenMismatch("Email confirmation token has expired.")

    user.is_email_confirmed = True
    user.email_confirmation_token = ""
    db.commit()
    logger.info("Email confirmed", extra={"user_id": user.id})
