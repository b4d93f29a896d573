"""Record identifiers: UUID4 strings."""

import uuid

from app.core.errors import InvalidId


def new_id() -> str:
    return str(uuid.uuid4())


def is_valid_id(value: object) -> bool:
    """True when value is a canonical UUID string (as stored in id columns)."""
    if not isinstance(value, str):
        return False
    try:
        return str(uuid.UUID(value)) == value.lower()
    except ValueError:
        return False


def require_valid_id(value: str) -> str:
    """Return the normalized id or raise InvalidId before any lookup happens."""
    if not is_valid_id(value):
        raise InvalidId()
    return value.lower()
