"""
Commit-or-rollback boundary shared by the use cases.
"""

from typing import Awaitable, Callable, Optional, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from repairconnect.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class TransactionService:
    """
    Wraps one request's session.

    Repositories only flush; whatever an operation staged becomes visible to
    other sessions when ``execute_in_transaction`` commits it, and not before.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def execute_in_transaction(
        self, operation: Callable[[], Awaitable[T]], label: Optional[str] = None
    ) -> T:
        """Await ``operation`` then commit; on any error roll back and re-raise."""
        try:
            result = await operation()
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            logger.debug(
                "Transaction rolled back",
                operation=label or getattr(operation, "__name__", None),
                error=str(e),
            )
            raise
        return result

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
