"""
Base service class for the match stats engine.

Provides async database session management and retry logic for store reads.
Only I/O failures are retried; a document that cannot be parsed fails on the
first attempt.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, Tuple, Type, TypeVar
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from matchstats.utils.stats_exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar('T')

RETRYABLE_ERRORS: Tuple[Type[Exception], ...] = (StoreUnavailableError, SQLAlchemyError)


class BaseService:
    """Base class for store-backed services."""

    def __init__(self, session_factory):
        """
        Args:
            session_factory: Async session factory from Database class
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session that commits on success and rolls back on any error."""
        session = self.session_factory()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def execute_with_retry(
        self,
        func: Callable[[], Awaitable[T]],
        max_retries: int = 3,
        base_delay: float = 0.1
    ) -> T:
        """
        Await `func()`, retrying store failures with exponential backoff.

        Raises:
            The last store error once `max_retries` attempts are used up.
            Any other exception propagates immediately.
        """
        for attempt in range(max_retries):
            try:
                return await func()
            except RETRYABLE_ERRORS as e:
                if attempt == max_retries - 1:
                    raise
                logger.warning(f"Store call failed (attempt {attempt + 1}/{max_retries}), retrying: {e}")
                await asyncio.sleep(base_delay * (2 ** attempt))
