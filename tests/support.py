"""Shared base class for API tests: in-memory SQLite behind FastAPI's TestClient."""

import unittest

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.core.security import SubjectKind, TokenClaims, get_token_service
from app.main import app
from app.models import Admin, AdminPermission, Base, User
from app.schemas.users import UserCreate
from app.services.admins import create_admin
from app.services.users import create_user

API = "/api/v1"


class ApiTestCase(unittest.TestCase):
    """Fresh database per test; get_db is overridden to use it."""

    def setUp(self) -> None:
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app, raise_server_exceptions=False)
        self.tokens = get_token_service()

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()

    def session(self) -> Session:
        return self.SessionLocal()

    def make_admin(
        self,
        username: str = "root",
        password: str = "admin-pw",
        permissions: AdminPermission = AdminPermission.NONE,
    ) -> Admin:
        with self.session() as db:
            admin = create_admin(db, username, password, f"{username}@admins.io", permissions)
            db.expunge(admin)
            return admin

    def make_user(self, username: str, password: str = "pw1", email: str | None = None) -> User:
        body = UserCreate(username=username, password=password, email=email or f"{username}@x.com")
        with self.session() as db:
            user = create_user(db, self.tokens, body)
            db.expunge(user)
            return user

    def load_user(self, user_id: str) -> User | None:
        with self.session() as db:
            user = db.get(User, user_id)
            if user is not None:
                db.expunge(user)
            return user

    def token_for(self, identity: Admin | User) -> str:
        kind = SubjectKind.ADMIN if isinstance(identity, Admin) else SubjectKind.USER
        return self.tokens.issue(TokenClaims(kind=kind, subject_id=identity.id))

    def auth(self, identity: Admin | User) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(identity)}"}
