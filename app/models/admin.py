"""ORM model for back-office administrators."""

import enum

from sqlalchemy import Boolean, Column, DateTime, String, func

from app.core.ids import new_id
from app.models.base import Base


class AdminPermission(enum.Flag):
    """Capabilities an admin may hold."""

    NONE = 0
    SUPER_ADMIN = enum.auto()
    MANAGE_USERS = enum.auto()


class Admin(Base):
    """
    Administrator account. Admins are created with app.scripts.create_admin;
    there is no endpoint that creates them.
    """

    __tablename__ = "admins"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    perm_super_admin = Column(Boolean, nullable=False, default=False)
    perm_manage_users = Column(Boolean, nullable=False, default=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    @property
    def permissions(self) -> AdminPermission:
        perms = AdminPermission.NONE
        if self.perm_super_admin:
            perms |= AdminPermission.SUPER_ADMIN
        if self.perm_manage_users:
            perms |= AdminPermission.MANAGE_USERS
        return perms

    @permissions.setter
    def permissions(self, value: AdminPermission) -> None:
        self.perm_super_admin = AdminPermission.SUPER_ADMIN in value
        self.perm_manage_users = AdminPermission.MANAGE_USERS in value
