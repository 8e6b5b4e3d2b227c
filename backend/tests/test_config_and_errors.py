from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.config import Settings
from app.errors import (
    AppError,
    BadRequestError,
    ConflictError,
    InternalServerError,
    NotFoundError,
    UnauthorizedError,
    error_response,
)

ENV_VARS = ("SERVER_HOST", "SERVER_PORT", "DATABASE_URL", "DB_POOL_SIZE", "JWT_SECRET", "AUTH_MODE", "LOG_LEVEL")


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_settings_defaults(clean_env) -> None:
    s = Settings(_env_file=None)
    assert s.SERVER_HOST == "0.0.0.0"
    assert s.SERVER_PORT == 3000
    assert s.DATABASE_URL == "sqlite:///./users.db"
    assert s.DB_POOL_SIZE == 5
    assert s.JWT_SECRET == "your-secret-key"
    assert s.AUTH_MODE == "none"
    assert s.server_address == "0.0.0.0:3000"


def test_settings_from_environment(clean_env) -> None:
    clean_env.setenv("SERVER_HOST", "127.0.0.1")
    clean_env.setenv("SERVER_PORT", "8080")
    clean_env.setenv("AUTH_MODE", "jwt")
    s = Settings(_env_file=None)
    assert s.server_address == "127.0.0.1:8080"
    assert s.AUTH_MODE == "jwt"


def test_settings_reject_bad_port(clean_env) -> None:
    clean_env.setenv("SERVER_PORT", "not-a-port")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


@pytest.mark.parametrize(
    "cls, status, label",
    [
        (NotFoundError, 404, "Not Found"),
        (BadRequestError, 400, "Bad Request"),
        (InternalServerError, 500, "Internal Server Error"),
        (UnauthorizedError, 401, "Unauthorized"),
        (ConflictError, 409, "Conflict"),
    ],
)
def test_error_kinds(cls: type[AppError], status: int, label: str) -> None:
    err = cls("something went wrong")
    assert err.status_code == status
    assert err.message == "something went wrong"
    assert str(err) == f"{label}: something went wrong"


def test_error_response_envelope() -> None:
    res = error_response(409, "Email x@y.z is already taken")
    assert res.status_code == 409
    assert res.body == b'{"success":false,"message":"Email x@y.z is already taken"}'


def test_settings_reject_unknown_log_level(clean_env) -> None:
    clean_env.setenv("LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

    clean_env.setenv("LOG_LEVEL", "DEBUG")
    assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"
