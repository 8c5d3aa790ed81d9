"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate repositories, own the commit of each command, and
turn failures into inspectable outcomes.

Usage:
    from argument.services.base import BaseService

    class NoteService(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)
"""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from argument.core.exceptions import ApplicationError, DatabaseError
from argument.core.logging import get_logger
from argument.schemas.base import OperationResult

logger = get_logger(__name__)

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context
    - Error wrapping for database operations
    - Conversion of failures into OperationResult envelopes

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    - Implement business logic methods
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions.

        Raises:
            DatabaseError: For any SQLAlchemy failure
        """
        try:
            return await coro
        except SQLAlchemyError as e:
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise DatabaseError(f"Database operation failed: {operation}") from e

    async def _run_command(
        self,
        operation: str,
        command: Callable[[], Awaitable[T]],
    ) -> OperationResult[T]:
        """
        Run a mutating command and commit it.

        The command and the commit share one failure boundary: anything that
        goes wrong is rolled back, logged and returned as a failed result so
        no edit is lost silently.
        """
        try:
            data = await self._execute_db_operation(operation, command())
            await self._execute_db_operation(operation, self._session.commit())
        except ApplicationError as e:
            await self._session.rollback()
            self._logger.warning(
                "Command failed",
                extra={"operation": operation, "code": e.code, "error": e.message},
            )
            return OperationResult.fail(e, operation=operation)
        return OperationResult.ok(data, operation=operation)

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """Log a service operation with context."""
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """Log debug information."""
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
