from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from app.db.models import UserRecord
from app.db.repository import StorageError, UserRepository
from app.errors import BadRequestError, ConflictError, InternalServerError, NotFoundError
from app.schemas.users import CreateUserRequest, UpdateUserRequest


def is_valid_email(email: str) -> bool:
    # Deliberately loose: "a@b" fails, "a@b.c" passes.
    return "@" in email and "." in email


@contextmanager
def _storage_errors() -> Iterator[None]:
    try:
        yield
    except StorageError as exc:
        raise InternalServerError(f"Database error: {exc}") from exc


class UserService:
    """Business rules for users, independent of HTTP and SQL details."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    def get_all_users(self) -> list[UserRecord]:
        with _storage_errors():
            return self.repository.find_all()

    def get_user_by_id(self, user_id: uuid.UUID) -> UserRecord:
        with _storage_errors():
            rec = self.repository.find_by_id(user_id)
        if rec is None:
            raise NotFoundError(f"User with id {user_id} not found")
        return rec

    def create_user(self, req: CreateUserRequest) -> UserRecord:
        """Validate and persist a new user.

        Checks run in a fixed order: email format, then email uniqueness, then
        the name. When several fields are bad, the first failing check wins.
        """
        if not is_valid_email(req.email):
            raise BadRequestError("Invalid email format")

        with _storage_errors():
            existing = self.repository.find_by_email(req.email)
        if existing is not None:
            raise ConflictError(f"User with email {req.email} already exists")

        if not req.name.strip():
            raise BadRequestError("Name cannot be empty")

        with _storage_errors():
            return self.repository.create(name=req.name, email=req.email)

    def update_user(self, user_id: uuid.UUID, req: UpdateUserRequest) -> UserRecord:
        with _storage_errors():
            existing = self.repository.find_by_id(user_id)
        if existing is None:
            raise NotFoundError(f"User with id {user_id} not found")

        if req.email is not None:
            if not is_valid_email(req.email):
                raise BadRequestError("Invalid email format")
            with _storage_errors():
                owner = self.repository.find_by_email(req.email)
            if owner is not None and owner.id != user_id:
                raise ConflictError(f"Email {req.email} is already taken")

        if req.name is not None and not req.name.strip():
            raise BadRequestError("Name cannot be empty")

        with _storage_errors():
            updated = self.repository.update(user_id, name=req.name, email=req.email)
        # The row vanished between the existence check and the write.
        if updated is None:
            raise InternalServerError("Failed to update user")
        return updated

    def delete_user(self, user_id: uuid.UUID) -> None:
        with _storage_errors():
            deleted = self.repository.delete(user_id)
        if not deleted:
            raise NotFoundError(f"User with id {user_id} not found")

    def count_users(self) -> int:
        with _storage_errors():
            return self.repository.count()
