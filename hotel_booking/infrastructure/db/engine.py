from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from contextvars import ContextVar

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from hotel_booking.config import Settings


def build_engine(settings: Settings) -> AsyncEngine:
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL is required for SQL mode")
    return create_async_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class SessionScope:
    """
    Una sesión por unidad de trabajo.

    La sesión activa vive en un ContextVar: cada tarea asyncio ve la suya y
    los repositorios llamados dentro de `transaction()` comparten la misma
    transacción. Fuera de una transacción cada llamada abre una propia.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker
        self._current: ContextVar[AsyncSession | None] = ContextVar("hotel_booking_session", default=None)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        active = self._current.get()
        if active is not None:
            yield active
            return
        async with self._session_maker() as session:
            async with session.begin():
                token = self._current.set(session)
                try:
                    yield session
                finally:
                    self._current.reset(token)
