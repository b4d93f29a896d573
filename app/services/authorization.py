"""
Authorization decisions: who may view, create, edit or delete a resource.

All permission and ownership rules live in ``authorize``; endpoints only
resolve the caller and ask for a decision.

| Action            | Admin caller                        | User caller            |
|-------------------|-------------------------------------|------------------------|
| LIST_USERS        | SUPER_ADMIN or MANAGE_USERS         | deny                   |
| READ_USER         | SUPER_ADMIN or MANAGE_USERS         | own account only       |
| CREATE_USER       | SUPER_ADMIN or MANAGE_USERS         | deny                   |
| UPDATE_USER       | SUPER_ADMIN or MANAGE_USERS         | own account only       |
| UPDATE_BAN_STATUS | any admin                           | deny                   |
| DELETE_USER       | SUPER_ADMIN or MANAGE_USERS         | own account only       |
| READ_ADMIN        | own account only                    | deny                   |
"""

import enum
import logging
from dataclasses import dataclass

from app.core.errors import Unauthorized
from app.core.security import SubjectKind
from app.models import Admin, AdminPermission, User

logger = logging.getLogger(__name__)

USER_MANAGER_PERMISSIONS = AdminPermission.SUPER_ADMIN | AdminPermission.MANAGE_USERS


class Action(str, enum.Enum):
    LIST_USERS = "list_users"
    READ_USER = "read_user"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    UPDATE_BAN_STATUS = "update_ban_status"
    DELETE_USER = "delete_user"
    READ_ADMIN = "read_admin"


class Decision(str, enum.Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class Caller:
    """An authenticated admin or user that still exists in the store."""

    kind: SubjectKind
    id: str
    permissions: AdminPermission = AdminPermission.NONE

    @property
    def is_admin(self) -> bool:
        return self.kind is SubjectKind.ADMIN

    @classmethod
    def from_admin(cls, admin: Admin) -> "Caller":
        return cls(kind=SubjectKind.ADMIN, id=admin.id, permissions=admin.permissions)

    @classmethod
    def from_user(cls, user: User) -> "Caller":
        return cls(kind=SubjectKind.USER, id=user.id)


def _manages_users(caller: Caller) -> bool:
    return bool(caller.permissions & USER_MANAGER_PERMISSIONS)


def authorize(caller: Caller, action: Action, target_id: str | None = None) -> Decision:
    """Decide whether caller may perform action on the resource identified by target_id."""
    owns_target = target_id is not None and caller.id == target_id

    if caller.kind is SubjectKind.ADMIN:
        if action is Action.READ_ADMIN:
            allowed = owns_target
        elif action is Action.UPDATE_BAN_STATUS:
            allowed = True
        elif action in (
            Action.LIST_USERS,
            Action.READ_USER,
            Action.CREATE_USER,
            Action.UPDATE_USER,
            Action.DELETE_USER,
        ):
            allowed = _manages_users(caller)
        else:
            allowed = False
    elif caller.kind is SubjectKind.USER:
        if action in (Action.READ_USER, Action.UPDATE_USER, Action.DELETE_USER):
            allowed = owns_target
        else:
            allowed = False
    else:
        allowed = False

    return Decision.ALLOW if allowed else Decision.DENY


def require(caller: Caller, action: Action, target_id: str | None = None) -> None:
    """Raise Unauthorized unless authorize() allows the action."""
    if authorize(caller, action, target_id) is Decision.DENY:
        logger.info(
            "Access denied",
            extra={
                "caller_kind": caller.kind.value,
                "caller_id": caller.id,
                "action": action.value,
                "target_id": target_id,
            },
        )
        raise Unauthorized()
