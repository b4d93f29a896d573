"""Admin store operations."""

import logging

from sqlalchemy.orm import Session

from app.core.errors import EmailInUse, UsernameInUse
from app.core.ids import new_id
from app.core.security import hash_password
from app.models import Admin, AdminPermission
from app.schemas.auth import AdminOut, AdminPermissionsOut

logger = logging.getLogger(__name__)


def admin_to_out(admin: Admin) -> AdminOut:
    perms = admin.permissions
    return AdminOut(
        id=admin.id,
        username=admin.username,
        email=admin.email,
        permissions=AdminPermissionsOut(
            super_admin=AdminPermission.SUPER_ADMIN in perms,
            manage_users=AdminPermission.MANAGE_USERS in perms,
        ),
        created_at=admin.created_at,
    )


def get_admin(db: Session, admin_id: str) -> Admin | None:
    return db.query(Admin).filter(Admin.id == admin_id).first()


def create_admin(
    db: Session,
    username: str,
    password: str,
    email: str,
    permissions: AdminPermission = AdminPermission.NONE,
) -> Admin:
    """Insert an admin; username and email must be unique among admins."""
    email = email.strip().lower()
    if db.query(Admin.id).filter(Admin.username == username).first() is not None:
        raise UsernameInUse()
    if db.query(Admin.id).filter(Admin.email == email).first() is not None:
        raise EmailInUse()

    admin = Admin(
        id=new_id(),
        username=username,
        email=email,
        password_hash=hash_password(password),
    )
    admin.permissions = permissions
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info(
        "Admin created",
        extra={"admin_id": admin.id, "permissions": str(permissions)},
    )
    return admin
