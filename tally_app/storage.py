"""Lock-guarded load-modify-store cycles over the SQLAlchemy session."""
from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Generator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StorageFailure
from .extensions import db


class LockedStore:
    """Base for the credential store and the counter ledger.

    Every mutation runs inside `transaction()`, which holds the store's lock
    from the initial load until the commit, so concurrent writers to the same
    store are serialised. Reads use `read()` and never wait on the lock.
    """

    label = "store"

    def __init__(self) -> None:
        self._lock = RLock()

    @contextmanager
    def transaction(self) -> Generator[Session, None, None]:
        with self._lock:
            session = db.session
            # Drop cached rows so the change is applied to the committed state.
            session.expire_all()
            try:
                yield session
                session.commit()
            except SQLAlchemyError as exc:
                session.rollback()
                raise StorageFailure(f"Could not persist {self.label}") from exc
            except Exception:
                session.rollback()
                raise

    @contextmanager
    def read(self) -> Generator[Session, None, None]:
        session = db.session
        try:
            yield session
        except SQLAlchemyError as exc:
            session.rollback()
            raise StorageFailure(f"Could not read {self.label}") from exc
