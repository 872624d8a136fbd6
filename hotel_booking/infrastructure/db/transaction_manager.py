from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.infrastructure.db.engine import SessionScope


class SQLAlchemyTransactionManager(TransactionManager):
    def __init__(self, sessions: SessionScope) -> None:
        self._sessions = sessions

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        async with self._sessions.transaction():
            yield
