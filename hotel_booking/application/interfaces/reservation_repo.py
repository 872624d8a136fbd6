"""Interface ReservationRepo - Puerto para repositorio de reservaciones."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable

from hotel_booking.domain.entities.reservation import ACTIVE_STATUSES, Reservation, ReservationStatus


class ReservationRepo(ABC):
    @abstractmethod
    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        raise NotImplementedError

    @abstractmethod
    async def find_by_room_and_date_range(
        self,
        room_id: int,
        check_in: date,
        check_out: date,
        statuses: Iterable[ReservationStatus] = ACTIVE_STATUSES,
    ) -> list[Reservation]:
        """Reservaciones de la habitación que se superponen con [check_in, check_out)."""
        raise NotImplementedError

    @abstractmethod
    async def save(self, reservation: Reservation) -> Reservation:
        """Persiste el snapshot inicial; el id debe ser único."""
        raise NotImplementedError

    @abstractmethod
    async def update(
        self,
        reservation: Reservation,
        expected_lock_version: int | None = None,
    ) -> None:
        """Persiste el estado completo; OptimisticLockError si la versión no coincide."""
        raise NotImplementedError
