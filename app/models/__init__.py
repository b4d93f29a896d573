"""SQLAlchemy ORM models."""

from app.models.admin import Admin, AdminPermission
from app.models.base import Base
from app.models.user import User

__all__ = ["Admin", "AdminPermission", "Base", "User"]
