import asyncio
from functools import lru_cache

from fastapi import Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from hotel_booking.application.booking_orchestrator import BookingOrchestrator
from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.application.payment_service import PaymentService
from hotel_booking.config import Settings, get_settings
from hotel_booking.domain.pricing import build_pricing_strategy
from hotel_booking.infrastructure.circuit_breaker import build_gateway_breaker
from hotel_booking.infrastructure.db.engine import SessionScope, build_engine, build_session_factory
from hotel_booking.infrastructure.db.repositories import GuestRepoSQL, ReservationRepoSQL, RoomRepoSQL
from hotel_booking.infrastructure.db.tables import metadata
from hotel_booking.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from hotel_booking.infrastructure.in_memory import (
    InMemoryGuestRepo,
    InMemoryReservationRepo,
    InMemoryRoomRepo,
    NoopTransactionManager,
)
from hotel_booking.infrastructure.notifier import LoggingNotifier
from hotel_booking.infrastructure.payment import (
    ExternalPosTerminal,
    OnlineGatewayChannel,
    PosTerminalChannel,
    SecureBankPortal,
)
from hotel_booking.infrastructure.seed import seed_demo_rooms


class BookingContainer:
    """Objetos de larga vida compartidos por todas las solicitudes."""

    def __init__(
        self,
        settings: Settings,
        orchestrator: BookingOrchestrator,
        room_repo: RoomRepo,
        engine: AsyncEngine | None = None,
    ) -> None:
        self.settings = settings
        self.orchestrator = orchestrator
        self.room_repo = room_repo
        self.engine = engine
        self._ready = False
        self._ready_lock: asyncio.Lock | None = None

    async def ensure_ready(self) -> None:
        """Crea las tablas (modo SQL) y carga el inventario demo una sola vez."""
        if self._ready:
            return
        if self._ready_lock is None:
            self._ready_lock = asyncio.Lock()
        async with self._ready_lock:
            if self._ready:
                return
            if self.engine is not None:
                async with self.engine.begin() as conn:
                    await conn.run_sync(metadata.create_all)
            if self.settings.seed_demo_rooms:
                await seed_demo_rooms(self.room_repo)
            self._ready = True

    async def check_store(self) -> None:
        if self.engine is None:
            await self.room_repo.list_all()
            return
        async with self.engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
            result.scalar()

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()


def build_payment_service(settings: Settings) -> PaymentService:
    pos = PosTerminalChannel(ExternalPosTerminal(decline_rate=settings.pos_decline_rate))
    gateway = OnlineGatewayChannel(
        portal=SecureBankPortal(
            base_url=settings.gateway_base_url,
            decline_rate=settings.gateway_decline_rate,
        ),
        breaker=build_gateway_breaker(
            fail_max=settings.gateway_breaker_fail_max,
            reset_timeout=settings.gateway_breaker_reset_timeout,
        ),
    )
    return PaymentService(
        channels={pos.name: pos, gateway.name: gateway},
        selected=settings.default_payment_channel,
    )


def build_container(settings: Settings) -> BookingContainer:
    engine = None
    if settings.use_in_memory:
        room_repo = InMemoryRoomRepo()
        guest_repo = InMemoryGuestRepo()
        reservation_repo = InMemoryReservationRepo()
        tx_manager = NoopTransactionManager()
    else:
        engine = build_engine(settings)
        sessions = SessionScope(build_session_factory(engine))
        room_repo = RoomRepoSQL(sessions)
        guest_repo = GuestRepoSQL(sessions)
        reservation_repo = ReservationRepoSQL(sessions)
        tx_manager = SQLAlchemyTransactionManager(sessions)

    orchestrator = BookingOrchestrator(
        room_repo=room_repo,
        guest_repo=guest_repo,
        reservation_repo=reservation_repo,
        payment_service=build_payment_service(settings),
        notifier=LoggingNotifier(hotel_name=settings.hotel_name),
        transaction_manager=tx_manager,
        pricing_strategy=build_pricing_strategy(
            settings.pricing_strategy, settings.seasonal_multiplier
        ),
        seasonal_multiplier=settings.seasonal_multiplier,
        currency_code=settings.currency_code,
        retry_attempts=settings.reserve_retry_attempts,
        retry_delay=settings.reserve_retry_delay_seconds,
    )
    return BookingContainer(settings, orchestrator, room_repo, engine)


@lru_cache(maxsize=1)
def get_container() -> BookingContainer:
    return build_container(get_settings())


async def get_booking_container(
    container: BookingContainer = Depends(get_container),
) -> BookingContainer:
    await container.ensure_ready()
    return container


async def get_orchestrator(
    container: BookingContainer = Depends(get_booking_container),
) -> BookingOrchestrator:
    return container.orchestrator
