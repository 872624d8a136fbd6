from copy import deepcopy
from datetime import date
from typing import Iterable

from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.domain.entities.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus
from hotel_booking.domain.errors import OptimisticLockError, ReservationNotFoundError
from hotel_booking.domain.value_objects.stay_period import StayPeriod


class InMemoryReservationRepo(ReservationRepo):
    def __init__(self) -> None:
        self.reservations: dict[str, Reservation] = {}

    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        reservation = self.reservations.get(reservation_id)
        return deepcopy(reservation) if reservation else None

    async def find_by_room_and_date_range(
        self,
        room_id: int,
        check_in: date,
        check_out: date,
        statuses: Iterable[ReservationStatus] = ACTIVE_STATUSES,
    ) -> list[Reservation]:
        wanted = set(statuses)
        requested = StayPeriod(check_in, check_out)
        return [
            deepcopy(reservation)
            for reservation in self.reservations.values()
            if reservation.room_id == room_id
            and reservation.status in wanted
            and reservation.stay.overlaps_with(requested)
        ]

    async def save(self, reservation: Reservation) -> Reservation:
        if reservation.id in self.reservations:
            raise ValueError("Reservation id already exists")
        self.reservations[reservation.id] = deepcopy(reservation)
        return reservation

    async def update(
        self,
        reservation: Reservation,
        expected_lock_version: int | None = None,
    ) -> None:
        current = self.reservations.get(reservation.id)
        if current is None:
            raise ReservationNotFoundError(reservation.id)
        if expected_lock_version is not None and current.lock_version != expected_lock_version:
            raise OptimisticLockError(
                "reservation", reservation.id, expected_lock_version, current.lock_version
            )
        self.reservations[reservation.id] = deepcopy(reservation)
