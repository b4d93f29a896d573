"""Tests for the create_admin CLI."""

import unittest
from unittest.mock import patch

from support import ApiTestCase

from app.models import Admin, AdminPermission
from app.scripts import create_admin as cli


class TestCreateAdminCli(ApiTestCase):
    def run_cli(self, *argv: str) -> int:
        with patch.object(cli, "SessionLocal", self.SessionLocal):
            return cli.main(list(argv))

    def test_creates_super_admin(self) -> None:
        code = self.run_cli("root", "admin-pw", "Root@Admins.io", "--super-admin")
        self.assertEqual(code, 0)
        with self.session() as db:
            admin = db.query(Admin).filter(Admin.username == "root").one()
            self.assertEqual(admin.email, "root@admins.io")
            self.assertEqual(admin.permissions, AdminPermission.SUPER_ADMIN)

    def test_permission_flags_combine(self) -> None:
        self.run_cli("ops", "admin-pw", "ops@admins.io", "--super-admin", "--manage-users")
        self.run_cli("viewer", "admin-pw", "viewer@admins.io")
        with self.session() as db:
            ops = db.query(Admin).filter(Admin.username == "ops").one()
            viewer = db.query(Admin).filter(Admin.username == "viewer").one()
            self.assertEqual(
                ops.permissions, AdminPermission.SUPER_ADMIN | AdminPermission.MANAGE_USERS
            )
            self.assertEqual(viewer.permissions, AdminPermission.NONE)

    def test_duplicate_username_fails(self) -> None:
        self.assertEqual(self.run_cli("root", "admin-pw", "root@admins.io"), 0)
        self.assertEqual(self.run_cli("root", "admin-pw", "other@admins.io"), 1)
        self.assertEqual(self.run_cli("root2", "admin-pw", "root@admins.io"), 1)

    def test_invalid_arguments(self) -> None:
        self.assertEqual(self.run_cli("   ", "admin-pw", "a@admins.io"), 1)
        self.assertEqual(self.run_cli("root", "admin-pw", "not-an-email"), 1)
        self.assertEqual(self.run_cli("root", "p" * 73, "root@admins.io"), 1)
        with self.session() as db:
            self.assertEqual(db.query(Admin).count(), 0)


if __name__ == "__main__":
    unittest.main()
