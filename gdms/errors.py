"""Domain errors raised by the device and gateway managers."""

import functools
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


class GDMSError(Exception):
    """Base class for domain errors."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFound(GDMSError):
    """Referenced entity does not exist."""


class Conflict(GDMSError):
    """Uniqueness or relationship invariant violated."""


class Invalid(GDMSError):
    """Input the core refuses to act on."""


class StorageFailure(GDMSError):
    """Storage error not tied to a known invariant."""


def transactional(func):
    """
    Run a manager method as one unit of work on ``self.db``.

    Any failure rolls the session back. Integrity errors that slip past the
    pre-checks become Conflict, other SQLAlchemy errors become StorageFailure.
    """

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except GDMSError:
            await self.db.rollback()
            raise
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning("Constraint violation in %s: %s", func.__name__, exc.orig)
            raise Conflict("Storage constraint violated") from exc
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.exception("Storage failure in %s", func.__name__)
            raise StorageFailure("Unexpected storage error") from exc
        except Exception:
            await self.db.rollback()
            raise

    return wrapper
