import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.db.repository import UserRepository
from app.db.session import Database
from app.main import create_app
from app.services.user_service import UserService


@pytest.fixture()
def make_settings(tmp_path):
    """Factory for isolated settings: a fresh SQLite file per test, auth off unless overridden."""

    def _make(**overrides) -> Settings:
        values = {"DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}", "AUTH_MODE": "none"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture()
def settings(make_settings):
    return make_settings()


@pytest.fixture()
def client(settings):
    app = create_app(settings=settings)
    return TestClient(app)


@pytest.fixture()
def database(settings):
    db = Database.from_url(settings.DATABASE_URL)
    db.create_tables()
    yield db
    db.dispose()


@pytest.fixture()
def repository(database):
    return UserRepository(database.SessionLocal)


@pytest.fixture()
def service(repository):
    return UserService(repository)
