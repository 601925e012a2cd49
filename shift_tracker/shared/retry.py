"""
Retry policy for status writes

SQLite reports contention as "database is locked" / SQLITE_BUSY. Only that class
of failure is retried, with linear backoff (100ms, 200ms, 300ms by default);
anything else is surfaced immediately as StorageFailureError.
"""

import functools
import logging
import time

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from ..config import STATUS_WRITE_BACKOFF_SECONDS, STATUS_WRITE_MAX_RETRIES
from ..exceptions import StorageFailureError, StorageTransientError

logger = logging.getLogger(__name__)

_LOCKED_MARKERS = ("database is locked", "database table is locked", "sqlite_busy", "busy")

# Blocking: routes that reach these writes are plain `def` so they run in the threadpool.
# Module attribute so tests can swap it out.
_sleep = time.sleep


def is_locked_error(exc: BaseException) -> bool:
    """True if the error is a busy/locked condition worth retrying"""
    if isinstance(exc, StorageTransientError):
        return True
    if not isinstance(exc, OperationalError):
        return False
    message = str(exc.orig if exc.orig is not None else exc).lower()
    return any(marker in message for marker in _LOCKED_MARKERS)


def retry_status_write(func):
    """
    Wrap a repository write whose first argument is the Session.

    The wrapped function must apply its mutations and commit, so it can be
    re-run from scratch after a rollback.
    """

    @functools.wraps(func)
    def wrapper(db, *args, **kwargs):
        retries = 0
        while True:
            try:
                return func(db, *args, **kwargs)
            except (StorageTransientError, SQLAlchemyError) as e:
                db.rollback()
                if not is_locked_error(e):
                    logger.error(f"❌ {func.__name__} failed: {e}")
                    raise StorageFailureError(f"{func.__name__} failed: {e}") from e

                if retries >= STATUS_WRITE_MAX_RETRIES:
                    logger.error(f"❌ {func.__name__} still locked after {retries} retries")
                    raise StorageFailureError(
                        f"{func.__name__} failed: database busy after {retries} retries"
                    ) from e

                retries += 1
                delay = STATUS_WRITE_BACKOFF_SECONDS * retries
                logger.warning(
                    f"⚠️ {func.__name__} hit a locked database, retry {retries}/{STATUS_WRITE_MAX_RETRIES} in {delay:.2f}s"
                )
                _sleep(delay)

    return wrapper
