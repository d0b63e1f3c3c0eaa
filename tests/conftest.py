import os
import tempfile
from typing import Callable, Generator

# Settings are read at import time, so the environment goes first
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["APP_RATE_LIMIT_ENABLED"] = "false"
os.environ["APP_BACKEND_URL"] = "http://testserver"
os.environ["APP_AUTH__SECRET_KEY"] = "test-secret-key"
os.environ["APP_DATABASE__DATABASE_URL"] = "sqlite://"
os.environ["APP_MEDIA__UPLOAD_DIR"] = tempfile.mkdtemp(prefix="gem_finder_uploads_")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from gem_finder.core.security import security_manager  # noqa: E402
from gem_finder.db.base import Base  # noqa: E402
from gem_finder.db.session import get_db  # noqa: E402
from gem_finder.main import app  # noqa: E402
from gem_finder.models.place_model import Place  # noqa: E402
from gem_finder.models.rating_model import Rating  # noqa: E402
from gem_finder.models.user_model import User  # noqa: E402


# In-memory SQLite shared by every connection of the test engine
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
)

# bcrypt is slow; every fixture user shares one hash
DEFAULT_PASSWORD = "secret123"
DEFAULT_PASSWORD_HASH = security_manager.get_password_hash(DEFAULT_PASSWORD)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session: Session) -> Callable[..., User]:
    def _make_user(name: str, email: str, is_admin: bool = False) -> User:
        user = User(
            name=name,
            email=email,
            password_hash=DEFAULT_PASSWORD_HASH,
            is_admin=is_admin,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def sample_user(make_user) -> User:
    return make_user("Asha", "asha@example.com")


@pytest.fixture
def other_user(make_user) -> User:
    return make_user("Ravi", "ravi@example.com")


@pytest.fixture
def admin_user(make_user) -> User:
    return make_user("Admin", "admin@example.com", is_admin=True)


def headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {security_manager.token_for_user(user)}"}


@pytest.fixture
def auth_headers(sample_user: User) -> dict:
    return headers_for(sample_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return headers_for(other_user)


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    return headers_for(admin_user)


@pytest.fixture
def make_place(db_session: Session) -> Callable[..., Place]:
    def _make_place(owner: User, title: str = "Hidden Lake", **fields) -> Place:
        place = Place(
            user_id=owner.id,
            title=title,
            description=fields.pop("description", "Quiet lake behind the hills"),
            category=fields.pop("category", "nature"),
            location=fields.pop("location", "12.9716,77.5946"),
            **fields,
        )
        db_session.add(place)
        db_session.commit()
        db_session.refresh(place)
        return place

    return _make_place


@pytest.fixture
def sample_place(make_place, sample_user: User) -> Place:
    return make_place(sample_user)


@pytest.fixture
def add_rating(db_session: Session) -> Callable[[User, Place, int], Rating]:
    def _add_rating(user: User, place: Place, value: int) -> Rating:
        rating = Rating(user_id=user.id, place_id=place.id, rating=value)
        db_session.add(rating)
        db_session.commit()
        return rating

    return _add_rating


@pytest.fixture
def headers_for_user() -> Callable[[User], dict]:
    return headers_for
