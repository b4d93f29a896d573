"""Password hashing and the token service (JWT identity tokens, email tokens)."""

import enum
import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

from app.core.config import Settings, get_settings
from app.core.errors import ConfigurationError, InvalidToken
from app.core.ids import is_valid_id

logger = logging.getLogger(__name__)

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 1
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
# bcrypt only reads the first 72 bytes; longer passwords are rejected at the boundary.
PASSWORD_MAX_BYTES = 72
PASSWORD_MAX_LEN = PASSWORD_MAX_BYTES


def password_too_long(plain_password: str) -> bool:
    return len(plain_password.encode("utf-8")) > PASSWORD_MAX_BYTES


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    if password_too_long(plain_password):
        raise ValueError(f"password exceeds {PASSWORD_MAX_BYTES} bytes")
    pw_bytes = plain_password.encode("utf-8")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (bcrypt compares in constant time)."""
    if password_too_long(plain_password):
        return False
    pw_bytes = plain_password.encode("utf-8")
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def _dummy_hash() -> str:
    return hash_password(secrets.token_urlsafe(16))


def burn_password_check(plain_password: str) -> None:
    """Spend one hash comparison so unknown usernames cost as much as wrong passwords."""
    verify_password(plain_password, _dummy_hash())


class SubjectKind(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by an access token."""

    kind: SubjectKind
    subject_id: str


@dataclass(frozen=True)
class TokenConfig:
    secret: str
    algorithm: str = "HS256"
    ttl_seconds: int = 36000
    email_token_bytes: int = 32
    email_token_ttl: timedelta | None = None

    @classmethod
    def from_settings(cls, cfg: Settings) -> "TokenConfig":
        expire_hours = cfg.EMAIL_TOKEN_EXPIRE_HOURS
        return cls(
            secret=cfg.JWT_SECRET.get_secret_value(),
            algorithm=cfg.JWT_ALGORITHM,
            ttl_seconds=cfg.JWT_EXPIRE_SECONDS,
            email_token_bytes=cfg.EMAIL_TOKEN_BYTES,
            email_token_ttl=timedelta(hours=expire_hours) if expire_hours else None,
        )


class TokenService:
    """
    Issues and verifies signed, time-limited identity tokens.

    Tokens are stateless: nothing is stored server side and they expire by clock.
    Also mints the random single-use tokens used for email confirmation.
    """

    def __init__(self, config: TokenConfig):
        if not config.secret or not config.secret.strip():
            raise ConfigurationError("Token signing key is not configured")
        self._config = config

    @property
    def ttl_seconds(self) -> int:
        return self._config.ttl_seconds

    def issue(self, claims: TokenClaims, now: datetime | None = None) -> str:
        """Sign claims; the token expires ttl_seconds after now."""
        now = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": claims.subject_id,
            "kind": claims.kind.value,
            "iat": now,
            "exp": now + timedelta(seconds=self._config.ttl_seconds),
        }
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and validate a token; return its claims.
        Raises InvalidToken for bad signature, malformed token, bad claims or expiry alike.
        """
        try:
            payload = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                options={"require": ["exp", "sub", "kind"]},
            )
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            raise InvalidToken() from e

        try:
            kind = SubjectKind(payload["kind"])
        except ValueError as e:
            raise InvalidToken() from e
        subject_id = payload["sub"]
        if not is_valid_id(subject_id):
            raise InvalidToken()
        return TokenClaims(kind=kind, subject_id=subject_id)

    def issue_email_verification_token(self, identity_id: str) -> str:
        """Return a fresh random token; the caller stores it on the identity."""
        token = secrets.token_urlsafe(self._config.email_token_bytes)
        logger.debug("Issued email verification token", extra={"user_id": identity_id})
        return token

    def email_token_matches(self, stored: str | None, presented: str) -> bool:
        """Exact string equality, compared in constant time. An empty stored token never matches."""
        if not stored:
            return False
        return secrets.compare_digest(stored.encode("utf-8"), presented.encode("utf-8"))

    def email_token_expired(self, issued_at: datetime | None, now: datetime | None = None) -> bool:
        """True when email tokens expire and this one is older than the configured TTL."""
        ttl = self._config.email_token_ttl
        if ttl is None or issued_at is None:
            return False
        if issued_at.tzinfo is None:
            # SQLite drops tzinfo; stored values are always UTC
            issued_at = issued_at.replace(tzinfo=UTC)
        now = now or datetime.now(UTC)
        return now - issued_at > ttl


@lru_cache
def get_token_service() -> TokenService:
    """Token service built from settings (safe to call from dependencies)."""
    return TokenService(TokenConfig.from_settings(get_settings()))
