import logging
from decimal import Decimal

from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.domain.entities.room import Room, RoomStatus, RoomType

logger = logging.getLogger(__name__)

# (id, número, tipo, tarifa base)
DEMO_ROOMS: list[tuple[int, str, RoomType, Decimal]] = [
    (101, "101", RoomType.SINGLE, Decimal("100.00")),
    (102, "102", RoomType.SINGLE, Decimal("100.00")),
    (201, "201", RoomType.DOUBLE, Decimal("150.00")),
    (202, "202", RoomType.DOUBLE, Decimal("150.00")),
    (301, "301", RoomType.SUITE, Decimal("250.00")),
    (401, "401", RoomType.DELUXE, Decimal("400.00")),
]


async def seed_demo_rooms(room_repo: RoomRepo) -> int:
    """Carga el inventario de demostración si el store está vacío."""
    if await room_repo.list_all():
        return 0
    for room_id, number, room_type, rate in DEMO_ROOMS:
        await room_repo.save(
            Room(
                id=room_id,
                number=number,
                room_type=room_type,
                base_rate=rate,
                status=RoomStatus.AVAILABLE,
            )
        )
    logger.info("Demo rooms seeded", extra={"count": len(DEMO_ROOMS)})
    return len(DEMO_ROOMS)
