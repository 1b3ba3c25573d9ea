"""Transaction boundary used by every mutating service.

Commits on success and rolls back on any exception. Storage exceptions are
translated into the error taxonomy so callers never see raw SQLAlchemy errors.
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fitness_tracker.core.errors import ConflictError, FitnessTrackerError, InternalError, NotFoundError

logger = logging.getLogger(__name__)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    # PostgreSQL: "violates foreign key constraint"; SQLite: "FOREIGN KEY constraint failed"
    return "foreign key" in str(exc.orig).lower()


def translate_integrity_error(exc: IntegrityError) -> FitnessTrackerError:
    if is_foreign_key_violation(exc):
        return NotFoundError("Reference", "A referenced record does not exist")
    return ConflictError("Record conflicts with an existing record")


@asynccontextmanager
async def transaction(
    session: AsyncSession,
    on_integrity_error: FitnessTrackerError | Callable[[IntegrityError], FitnessTrackerError] | None = None,
) -> AsyncIterator[AsyncSession]:
    """Run the block as one atomic unit on ``session``.

    ``on_integrity_error`` replaces the default translation of constraint
    violations when the caller knows what the violation means. It is either
    the error to raise or a function mapping the ``IntegrityError`` to one.
    """
    try:
        yield session
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if callable(on_integrity_error):
            error = on_integrity_error(exc)
        else:
            error = on_integrity_error or translate_integrity_error(exc)
        logger.warning("Integrity error translated to %s: %s", error.reason, exc.orig)
        raise error from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Storage failure")
        raise InternalError("Storage failure") from exc
    except BaseException:
        await session.rollback()
        raise
