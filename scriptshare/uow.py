import logging
from typing import Any, Callable, Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from scriptshare.db import get_db as get_original_db  # fix for test mocks

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, db: Session):
        self.db = db
        self._after_commit: list[tuple[Callable[..., Any], tuple, dict]] = []

    def __getattr__(self, attr):
        """
        Delegate attribute access to the underlying session.
        This allows the UoW to be used as if it were a Session.
        """
        return getattr(self.db, attr)

    def after_commit(self, hook: Callable[..., Any], *args, **kwargs) -> None:
        """Run hook once the current transaction commits. Dropped on rollback."""
        self._after_commit.append((hook, args, kwargs))

    def commit(self) -> None:
        self.db.commit()
        hooks, self._after_commit = self._after_commit, []
        for hook, args, kwargs in hooks:
            try:
                hook(*args, **kwargs)
            except Exception:
                logger.exception("Post-commit hook %r failed", hook)

    def rollback(self) -> None:
        if self._after_commit:
            logger.warning(
                "Rolling back, %d post-commit hook(s) discarded",
                len(self._after_commit),
            )
        self._after_commit = []
        self.db.rollback()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type:
                # Roll back if an exception occurred.
                self.rollback()
            else:
                # Otherwise, commit the transaction.
                self.commit()
        finally:
            self.db.close()


def get_uow(
    db: Session = Depends(get_original_db),
) -> Generator[UnitOfWork, None, None]:
    """
    Dependency that yields a UnitOfWork instance.

    When used in a route, FastAPI will call this dependency once per request,
    ensuring that the same UoW (and underlying session) is passed to all services.
    """
    with UnitOfWork(db) as uow:
        yield uow
