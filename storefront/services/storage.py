# storefront/services/storage.py
"""
Scoped transaction over a SQLAlchemy session.

    with UnitOfWork(db.session) as session:
        session.add(...)

Commits when the block finishes, rolls back on any exception. The session
must have no pending changes on entry. SQLAlchemy errors come out as
StorageError (chained to the original); anything else is re-raised untouched.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from storefront.errors import StorageError

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, session):
        self.session = session

    def __enter__(self):
        # commit/rollback covers the whole session, so it must start clean
        if self.session.new or self.session.dirty or self.session.deleted:
            raise StorageError("Session has uncommitted changes; refusing to open a unit of work")
        return self.session

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            try:
                self.session.commit()
            except SQLAlchemyError as e:
                self._rollback()
                raise StorageError(f"Commit failed: {e}") from e
            return False

        self._rollback()
        if isinstance(exc, SQLAlchemyError):
            raise StorageError(f"Storage operation failed: {exc}") from exc
        return False

    def _rollback(self) -> None:
        try:
            self.session.rollback()
        except SQLAlchemyError:
            logger.exception("rollback failed")
