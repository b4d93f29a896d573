"""JWT login and caller-resolution dependencies (get_caller, get_current_admin, get_current_user)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import Unauthorized
from app.core.security import SubjectKind, TokenClaims, TokenService, get_token_service
from app.models import Admin, User
from app.schemas.auth import AdminOut, LoginRequest, TokenResponse
from app.schemas.errors import ErrorResponse
from app.schemas.users import UserOut
from app.services.admins import admin_to_out, get_admin
from app.services.authentication import authenticate
from app.services.authorization import Action, Caller, require
from app.services.users import get_user, user_to_out

router = APIRouter()
security = HTTPBearer(auto_error=False)

ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_token_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenClaims:
    """Dependency: require a Bearer token and verify it. Missing is 401, bad or expired is 400."""
    if credentials is None:
        raise Unauthorized("Not authenticated.")
    return tokens.verify(credentials.credentials)


def _load_identity(db: Session, claims: TokenClaims) -> Admin | User:
    """The token's subject must still exist; a deleted account is Unauthorized."""
    if claims.kind is SubjectKind.ADMIN:
        identity = get_admin(db, claims.subject_id)
    else:
        identity = get_user(db, claims.subject_id)
    if identity is None:
        raise Unauthorized()
    return identity


def get_caller(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> Caller:
    """Dependency: authenticated admin or user."""
    identity = _load_identity(db, claims)
    if isinstance(identity, Admin):
        return Caller.from_admin(identity)
    return Caller.from_user(identity)


def get_current_admin(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> Admin:
    """Dependency: authenticated admin. A user token is Unauthorized."""
    if claims.kind is not SubjectKind.ADMIN:
        raise Unauthorized()
    return _load_identity(db, claims)


def get_current_user(
    claims: Annotated[TokenClaims, Depends(get_token_claims)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Dependency: authenticated user. An admin token is Unauthorized."""
    if claims.kind is not SubjectKind.USER:
        raise Unauthorized()
    return _load_identity(db, claims)


@router.get("/admin", response_model=AdminOut, responses=ERROR_RESPONSES)
def read_current_admin(
    admin: Annotated[Admin, Depends(get_current_admin)],
) -> AdminOut:
    """Return the authenticated admin."""
    require(Caller.from_admin(admin), Action.READ_ADMIN, admin.id)
    return admin_to_out(admin)


@router.get("/user", response_model=UserOut, responses=ERROR_RESPONSES)
def read_current_user(
    user: Annotated[User, Depends(get_current_user)],
) -> UserOut:
    """Return the authenticated user."""
    require(Caller.from_user(user), Action.READ_USER, user.id)
    return user_to_out(user)


def _login(db: Session, tokens: TokenService, kind: SubjectKind, body: LoginRequest) -> TokenResponse:
    token = authenticate(db, tokens, kind, body.username, body.password)
    return TokenResponse(access_token=token, token_type="bearer", expires_in=tokens.ttl_seconds)


@router.post("/admin/login", response_model=TokenResponse, responses=ERROR_RESPONSES)
def login_admin(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """
    Authenticate an admin with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    return _login(db, tokens, SubjectKind.ADMIN, body)


@router.post("/user/login", response_model=TokenResponse, responses=ERROR_RESPONSES)
def login_user(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """Authenticate a user with username and password; returns a JWT access token."""
    return _login(db, tokens, SubjectKind.USER, body)
