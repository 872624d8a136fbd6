import logging

from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.locks import KeyedLock
from hotel_booking.application.room_availability import RoomAvailability
from hotel_booking.domain.entities.reservation import Reservation
from hotel_booking.domain.entities.room import RoomStatus
from hotel_booking.domain.errors import (
    OptimisticLockError,
    ReservationNotFoundError,
    StateConflictError,
)


class CheckInUseCase:
    def __init__(
        self,
        reservation_repo: ReservationRepo,
        room_availability: RoomAvailability,
        transaction_manager: TransactionManager,
        reservation_locks: KeyedLock,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._room_availability = room_availability
        self._transaction_manager = transaction_manager
        self._reservation_locks = reservation_locks
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: str) -> Reservation:
        async with self._reservation_locks.hold(reservation_id):
            async with self._transaction_manager.start():
                reservation = await self._reservation_repo.get_by_id(reservation_id)
                if reservation is None:
                    raise ReservationNotFoundError(reservation_id)
                expected_lock_version = reservation.lock_version
                reservation.check_in_guest(at=self._clock.now())
                try:
                    await self._reservation_repo.update(
                        reservation, expected_lock_version=expected_lock_version
                    )
                except OptimisticLockError as exc:
                    raise StateConflictError(
                        "MODIFIED", "CONFIRMED", f"check in reservation {reservation_id}"
                    ) from exc
                await self._room_availability.set_status(reservation.room_id, RoomStatus.OCCUPIED)

        self._logger.info(
            "Guest checked in",
            extra={"reservation_id": reservation_id, "room_id": reservation.room_id},
        )
        return reservation
