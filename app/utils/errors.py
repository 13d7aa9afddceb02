"""Translate unexpected failures inside service operations into API errors."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions.base import BadRequestException, CustomException
from core.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def service_operation(
    db_session: AsyncSession, failure_message: str
) -> AsyncIterator[None]:
    """
    Run a block of service work with flat error mapping.

    Application errors (not found, conflict, bad request) propagate as-is.
    Anything else, ORM and driver errors included, rolls the session back
    and surfaces as a ``BadRequestException`` carrying ``failure_message``.

    Usage:
        async with service_operation(self.db_session, "Failed to create location"):
            ...
    """
    try:
        yield
    except CustomException:
        await db_session.rollback()
        raise
    except Exception as e:
        await db_session.rollback()
        logger.error(f"{failure_message}: {type(e).__name__} - {e}")
        raise BadRequestException(failure_message) from e


def is_unique_violation(error: IntegrityError, *targets: str) -> bool:
    """
    Check whether an IntegrityError was raised by one of the given unique keys.

    ``targets`` may name the constraint or index (PostgreSQL reports those)
    or the ``table.column`` pair (SQLite reports that instead).
    """
    message = str(error.orig).lower()
    if "unique" not in message and "duplicate" not in message:
        return False
    return any(target.lower() in message for target in targets)
