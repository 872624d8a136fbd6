import logging
from datetime import date
from enum import Enum

from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.locks import KeyedLock
from hotel_booking.application.retry import retry_on_conflict
from hotel_booking.domain.entities.room import Room, RoomStatus, RoomType
from hotel_booking.domain.errors import OptimisticLockError, RoomNotFoundError
from hotel_booking.domain.value_objects.stay_period import StayPeriod

logger = logging.getLogger(__name__)


class ReserveOutcome(str, Enum):
    GRANTED = "GRANTED"
    CONFLICT = "CONFLICT"
    NOT_FOUND = "NOT_FOUND"


class RoomAvailability:
    """
    Decides whether a room is free for a stay and grants it atomically.

    `reserve` runs the availability check and the RESERVED write as one unit
    under the per-room lock, and the write itself is conditional on the room
    still being AVAILABLE at the version that was read. A lost conditional
    write re-runs the unit once before reporting CONFLICT.
    """

    def __init__(
        self,
        room_repo: RoomRepo,
        reservation_repo: ReservationRepo,
        transaction_manager: TransactionManager,
        room_locks: KeyedLock | None = None,
        retry_attempts: int = 2,
        retry_delay: float = 0.01,
    ) -> None:
        self._room_repo = room_repo
        self._reservation_repo = reservation_repo
        self._transaction_manager = transaction_manager
        self._room_locks = room_locks or KeyedLock("room")
        self._retry_attempts = retry_attempts
        self._retry_delay = retry_delay

    @property
    def room_locks(self) -> KeyedLock:
        return self._room_locks

    async def is_free(self, room_id: int, check_in: date, check_out: date) -> bool:
        overlapping = await self._reservation_repo.find_by_room_and_date_range(
            room_id, check_in, check_out
        )
        return not overlapping

    async def reserve(self, room_id: int, check_in: date, check_out: date) -> ReserveOutcome:
        stay = StayPeriod(check_in=check_in, check_out=check_out)

        async def attempt() -> ReserveOutcome:
            async with self._transaction_manager.start():
                room = await self._room_repo.get_by_id(room_id)
                if room is None:
                    return ReserveOutcome.NOT_FOUND
                if not room.is_available:
                    logger.info(
                        "Room not bookable",
                        extra={"room_id": room_id, "room_status": room.status.value},
                    )
                    return ReserveOutcome.CONFLICT
                if not await self.is_free(room_id, stay.check_in, stay.check_out):
                    logger.info(
                        "Room already booked for requested dates",
                        extra={"room_id": room_id, "stay": str(stay)},
                    )
                    return ReserveOutcome.CONFLICT
                await self._room_repo.update_status(
                    room_id,
                    RoomStatus.RESERVED,
                    expected_status=RoomStatus.AVAILABLE,
                    expected_lock_version=room.lock_version,
                )
                return ReserveOutcome.GRANTED

        async with self._room_locks.hold(room_id):
            try:
                outcome = await retry_on_conflict(
                    attempt, max_attempts=self._retry_attempts, base_delay=self._retry_delay
                )
            except OptimisticLockError:
                outcome = ReserveOutcome.CONFLICT

        logger.info(
            "Room reservation attempt finished",
            extra={"room_id": room_id, "stay": str(stay), "outcome": outcome.value},
        )
        return outcome

    async def release(self, room_id: int) -> Room:
        """Compensating action: return a provisionally RESERVED room to AVAILABLE."""
        async with self._room_locks.hold(room_id):
            async with self._transaction_manager.start():
                room = await self._room_repo.get_by_id(room_id)
                if room is None:
                    raise RoomNotFoundError(room_id)
                if room.status == RoomStatus.AVAILABLE:
                    return room
                released = await self._room_repo.update_status(room_id, RoomStatus.AVAILABLE)
        logger.info("Room released", extra={"room_id": room_id})
        return released

    async def set_status(self, room_id: int, status: RoomStatus) -> Room:
        """Serialized status write used by check-in, check-out and cancel."""
        async with self._room_locks.hold(room_id):
            async with self._transaction_manager.start():
                return await self._room_repo.update_status(room_id, status)

    async def search_available(
        self,
        check_in: date,
        check_out: date,
        room_type: RoomType | None = None,
    ) -> list[Room]:
        stay = StayPeriod(check_in=check_in, check_out=check_out)
        rooms = await self._room_repo.list_all()
        available: list[Room] = []
        for room in rooms:
            if not room.is_available:
                continue
            if room_type is not None and room.room_type != room_type:
                continue
            if await self.is_free(room.id, stay.check_in, stay.check_out):
                available.append(room)
        logger.debug(
            "Available rooms computed",
            extra={"stay": str(stay), "count": len(available)},
        )
        return available

    async def set_maintenance(self, room_id: int, on: bool) -> Room:
        """Explicit maintenance action: AVAILABLE <-> UNDER_MAINTENANCE only."""
        async with self._room_locks.hold(room_id):
            async with self._transaction_manager.start():
                room = await self._room_repo.get_by_id(room_id)
                if room is None:
                    raise RoomNotFoundError(room_id)
                expected_status, expected_lock_version = room.status, room.lock_version
                if on:
                    room.start_maintenance()
                else:
                    room.finish_maintenance()
                updated = await self._room_repo.update_status(
                    room_id,
                    room.status,
                    expected_status=expected_status,
                    expected_lock_version=expected_lock_version,
                )
        logger.info(
            "Room maintenance toggled",
            extra={"room_id": room_id, "room_status": updated.status.value},
        )
        return updated
