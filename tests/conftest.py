import os

# Must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["OWNER_PASSWORD"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models.user import User, UserRank
from app.services.auth import create_access_token, get_password_hash

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _make_user(db, username: str, rank: UserRank, password: str = "secret-pass") -> User:
    user = User(username=username, hashed_password=get_password_hash(password), rank=rank)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return _make_user(db, "admin", UserRank.ADMIN)


@pytest.fixture
def regular_user(db):
    return _make_user(db, "officer", UserRank.USER)


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(admin_user.id, admin_user.username, admin_user.rank)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(regular_user):
    token = create_access_token(regular_user.id, regular_user.username, regular_user.rank)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def create(client, admin_headers):
    """POST a value as admin and return the JSON body (asserting 200)."""
    def _create(path: str, body: dict) -> dict:
        r = client.post(f"/admin/values/{path}", json=body, headers=admin_headers)
        assert r.status_code == 200, r.text
        return r.json()

    return _create
