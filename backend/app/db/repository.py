from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.db.models import UserRecord


class StorageError(Exception):
    """Raised for any failure while talking to the database."""


class UserRepository:
    """SQL access for the `users` table.

    The repository holds the shared session factory (and through it the engine
    pool) and opens a fresh session per call, so one instance can be shared by
    every request. It does not check business rules such as email uniqueness.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        except SQLAlchemyError as exc:
            db.rollback()
            raise StorageError(str(exc)) from exc
        finally:
            db.close()

    def find_all(self) -> list[UserRecord]:
        with self._session() as db:
            q = db.query(UserRecord).order_by(UserRecord.created_at.desc(), UserRecord.pk.desc())
            return q.all()

    def find_by_id(self, user_id: uuid.UUID) -> UserRecord | None:
        with self._session() as db:
            return db.query(UserRecord).filter(UserRecord.id == user_id).first()

    def find_by_email(self, email: str) -> UserRecord | None:
        with self._session() as db:
            return db.query(UserRecord).filter(UserRecord.email == email).first()

    def create(self, *, name: str, email: str) -> UserRecord:
        with self._session() as db:
            rec = UserRecord(id=uuid.uuid4(), name=name, email=email)
            db.add(rec)
            db.commit()
            db.refresh(rec)
            return rec

    def update(
        self,
        user_id: uuid.UUID,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> UserRecord | None:
        """Merge the given fields over the stored row.

        Fields left as None keep their stored value. The read and the write
        share one transaction and the row is locked for its duration on
        backends that support `SELECT ... FOR UPDATE`.
        """
        with self._session() as db:
            rec = db.query(UserRecord).filter(UserRecord.id == user_id).with_for_update().first()
            if rec is None:
                return None
            if name is not None:
                rec.name = name
            if email is not None:
                rec.email = email
            db.commit()
            db.refresh(rec)
            return rec

    def delete(self, user_id: uuid.UUID) -> bool:
        with self._session() as db:
            removed = db.query(UserRecord).filter(UserRecord.id == user_id).delete(synchronize_session=False)
            db.commit()
            return removed > 0

    def count(self) -> int:
        with self._session() as db:
            return int(db.query(func.count(UserRecord.pk)).scalar() or 0)
