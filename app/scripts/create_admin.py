"""
Create an admin (admins cannot be created through the API). Run from project root:
  python -m app.scripts.create_admin USERNAME PASSWORD EMAIL [--super-admin] [--manage-users]
Example:
  python -m app.scripts.create_admin root your-secure-password root@example.com --super-admin
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.errors import Conflict
from app.core.security import PASSWORD_MAX_BYTES, USERNAME_MAX_LEN, password_too_long
from app.models import AdminPermission
from app.services.admins import create_admin

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an Askbox admin account.")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password (1-{PASSWORD_MAX_BYTES} bytes)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("--super-admin", action="store_true", help="Grant every permission")
    parser.add_argument("--manage-users", action="store_true", help="Allow managing user accounts")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not args.password or password_too_long(args.password):
        print(f"Password must be 1-{PASSWORD_MAX_BYTES} bytes.", file=sys.stderr)
        return 1
    if "@" not in args.email:
        print("Invalid email address.", file=sys.stderr)
        return 1

    permissions = AdminPermission.NONE
    if args.super_admin:
        permissions |= AdminPermission.SUPER_ADMIN
    if args.manage_users:
        permissions |= AdminPermission.MANAGE_USERS

    db = SessionLocal()
    try:
        admin = create_admin(db, username, args.password, args.email, permissions)
        admin_id = admin.id
    except Conflict as e:
        print(f"Admin '{username}' not created: {e.message}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Admin creation failed: %s", e)
        return 1
    finally:
        db.close()

    print(f"Created admin '{username}' ({admin_id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
