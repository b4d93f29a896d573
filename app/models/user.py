"""ORM model for user accounts (self-registered or created from the admin panel)."""

from sqlalchemy import Boolean, Column, DateTime, String, func

from app.core.ids import new_id
from app.models.base import Base


class User(Base):
    """
    End-user account.

    Username and email are unique within the users table; the unique indexes
    are the final guard against concurrent registrations.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    profile_img_url = Column(String(2048), nullable=False, default="")

    # settings
    is_askable = Column(Boolean, nullable=False, default=True)
    is_viewable = Column(Boolean, nullable=False, default=True)

    # ban_status
    is_banned = Column(Boolean, nullable=False, default=False)
    banned_by = Column(String(36), nullable=True)
    ban_date = Column(DateTime(timezone=True), nullable=True)

    is_email_confirmed = Column(Boolean, nullable=False, default=False)
    email_confirmation_token = Column(String(255), nullable=False, default="")
    email_confirmation_sent_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
