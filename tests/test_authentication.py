"""Tests for app.services.authentication against a real (SQLite) session."""

import unittest

from support import ApiTestCase

from app.core.errors import InvalidCredentials
from app.core.security import SubjectKind, TokenClaims
from app.services.authentication import authenticate


class TestAuthenticate(ApiTestCase):
    def test_user_credentials_yield_token_for_that_user(self) -> None:
        alice = self.make_user("alice", "pw1")
        with self.session() as db:
            token = authenticate(db, self.tokens, SubjectKind.USER, "alice", "pw1")
        self.assertEqual(
            self.tokens.verify(token),
            TokenClaims(kind=SubjectKind.USER, subject_id=alice.id),
        )

    def test_admin_credentials_yield_admin_token(self) -> None:
        admin = self.make_admin("root", "admin-pw")
        with self.session() as db:
            token = authenticate(db, self.tokens, SubjectKind.ADMIN, "root", "admin-pw")
        self.assertEqual(
            self.tokens.verify(token),
            TokenClaims(kind=SubjectKind.ADMIN, subject_id=admin.id),
        )

    def test_wrong_password(self) -> None:
        self.make_user("alice", "pw1")
        with self.session() as db:
            with self.assertRaises(InvalidCredentials):
                authenticate(db, self.tokens, SubjectKind.USER, "alice", "wrong")

    def test_unknown_username(self) -> None:
        with self.session() as db:
            with self.assertRaises(InvalidCredentials):
                authenticate(db, self.tokens, SubjectKind.USER, "nobody", "pw1")

    def test_namespaces_are_separate(self) -> None:
        self.make_user("sam", "user-pw")
        self.make_admin("sam", "admin-pw")
        with self.session() as db:
            # user password does not open the admin account and vice versa
            with self.assertRaises(InvalidCredentials):
                authenticate(db, self.tokens, SubjectKind.ADMIN, "sam", "user-pw")
            with self.assertRaises(InvalidCredentials):
                authenticate(db, self.tokens, SubjectKind.USER, "sam", "admin-pw")
            user_token = authenticate(db, self.tokens, SubjectKind.USER, "sam", "user-pw")
            admin_token = authenticate(db, self.tokens, SubjectKind.ADMIN, "sam", "admin-pw")
        self.assertEqual(self.tokens.verify(user_token).kind, SubjectKind.USER)
        self.assertEqual(self.tokens.verify(admin_token).kind, SubjectKind.ADMIN)

    def test_username_match_is_exact(self) -> None:
        self.make_user("alice", "pw1")
        with self.session() as db:
            with self.assertRaises(InvalidCredentials):
                authenticate(db, self.tokens, SubjectKind.USER, "Alice", "pw1")


if __name__ == "__main__":
    unittest.main()
