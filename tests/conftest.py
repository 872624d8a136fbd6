"""
Fixtures compartidas de la suite.

- Stores en memoria con inventario conocido (habitación 101 a 100.00)
- Canales de pago deterministas (sin rechazos aleatorios)
- Orquestador con reloj fijo
- Cliente HTTP (httpx + ASGITransport) con el orquestador de prueba inyectado
"""

import random
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from hotel_booking.api.dependencies import BookingContainer, get_container
from hotel_booking.application.booking_orchestrator import BookingOrchestrator
from hotel_booking.application.dtos.booking_dto import GuestDTO
from hotel_booking.application.interfaces.clock import FakeClock
from hotel_booking.application.payment_service import PaymentService
from hotel_booking.config import Settings
from hotel_booking.domain.entities.room import Room, RoomStatus, RoomType
from hotel_booking.infrastructure.circuit_breaker import build_gateway_breaker
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
from hotel_booking.main import app


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def room_repo() -> InMemoryRoomRepo:
    repo = InMemoryRoomRepo()
    for room in (
        Room(id=101, number="101", room_type=RoomType.SINGLE, base_rate=Decimal("100.00")),
        Room(id=102, number="102", room_type=RoomType.SINGLE, base_rate=Decimal("100.00")),
        Room(id=201, number="201", room_type=RoomType.DOUBLE, base_rate=Decimal("150.00")),
        Room(
            id=301,
            number="301",
            room_type=RoomType.SUITE,
            base_rate=Decimal("250.00"),
            status=RoomStatus.UNDER_MAINTENANCE,
        ),
    ):
        repo.rooms[room.id] = room
    return repo


@pytest.fixture
def guest_repo() -> InMemoryGuestRepo:
    return InMemoryGuestRepo()


@pytest.fixture
def reservation_repo() -> InMemoryReservationRepo:
    return InMemoryReservationRepo()


@pytest.fixture
def tx_manager() -> NoopTransactionManager:
    return NoopTransactionManager()


@pytest.fixture
def pos_channel() -> PosTerminalChannel:
    return PosTerminalChannel(ExternalPosTerminal(decline_rate=0.0, rng=random.Random(7)))


@pytest.fixture
def gateway_channel() -> OnlineGatewayChannel:
    return OnlineGatewayChannel(
        portal=SecureBankPortal(decline_rate=0.0, rng=random.Random(7)),
        breaker=build_gateway_breaker(fail_max=3, reset_timeout=60),
    )


@pytest.fixture
def payment_service(pos_channel, gateway_channel) -> PaymentService:
    return PaymentService({pos_channel.name: pos_channel, gateway_channel.name: gateway_channel})


@pytest.fixture
def notifier() -> LoggingNotifier:
    return LoggingNotifier()


@pytest.fixture
def orchestrator(
    room_repo, guest_repo, reservation_repo, payment_service, notifier, tx_manager, clock
) -> BookingOrchestrator:
    return BookingOrchestrator(
        room_repo=room_repo,
        guest_repo=guest_repo,
        reservation_repo=reservation_repo,
        payment_service=payment_service,
        notifier=notifier,
        transaction_manager=tx_manager,
        clock=clock,
        retry_delay=0,
    )


@pytest.fixture
def guest() -> GuestDTO:
    return GuestDTO(
        name="Nimal Perera",
        national_id="901234567V",
        phone="+94771234567",
        email="nimal@example.com",
        address="12 Galle Road, Colombo",
    )


@pytest.fixture
def booking_payload() -> dict:
    return {
        "guest": {
            "name": "Nimal Perera",
            "national_id": "901234567V",
            "phone": "+94771234567",
            "email": "nimal@example.com",
        },
        "room_id": 101,
        "check_in": "2024-01-10",
        "check_out": "2024-01-13",
    }


@pytest.fixture
def container(orchestrator, room_repo) -> BookingContainer:
    settings = Settings(use_in_memory=True, seed_demo_rooms=False)
    return BookingContainer(settings, orchestrator, room_repo)


@pytest_asyncio.fixture
async def client(container):
    """Cliente HTTP contra la app con el contenedor de prueba."""
    app.dependency_overrides[get_container] = lambda: container
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
