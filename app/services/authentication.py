"""Username/password authentication for admins and users."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import InvalidCredentials
from app.core.security import (
    SubjectKind,
    TokenClaims,
    TokenService,
    burn_password_check,
    verify_password,
)
from app.models import Admin, User

logger = logging.getLogger(__name__)

_MODEL_BY_KIND: dict[SubjectKind, type[Admin] | type[User]] = {
    SubjectKind.ADMIN: Admin,
    SubjectKind.USER: User,
}


def authenticate(
    db: Session,
    tokens: TokenService,
    kind: SubjectKind,
    username: str,
    password: str,
) -> str:
    """
    Check credentials within the kind's own namespace and return a signed token.

    Unknown username and wrong password both raise InvalidCredentials.
    """
    model = _MODEL_BY_KIND[kind]
    identity = db.query(model).filter(model.username == username).first()
    if identity is None:
        burn_password_check(password)
        logger.info("Login failed", extra={"kind": kind.value, "username": username})
        raise InvalidCredentials()
    if not verify_password(password, identity.password_hash):
        logger.info("Login failed", extra={"kind": kind.value, "username": username})
        raise InvalidCredentials()

    logger.info("Login succeeded", extra={"kind": kind.value, "subject_id": identity.id})
    return tokens.issue(TokenClaims(kind=kind, subject_id=identity.id))
