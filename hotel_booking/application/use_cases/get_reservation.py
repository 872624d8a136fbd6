from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.domain.entities.reservation import Reservation
from hotel_booking.domain.errors import ReservationNotFoundError, ValidationError


class GetReservationUseCase:
    def __init__(self, reservation_repo: ReservationRepo) -> None:
        self._reservation_repo = reservation_repo

    async def execute(self, reservation_id: str) -> Reservation:
        if not reservation_id or not reservation_id.strip():
            raise ValidationError("reservation_id", "is required")
        reservation = await self._reservation_repo.get_by_id(reservation_id.strip())
        if reservation is None:
            raise ReservationNotFoundError(reservation_id)
        return reservation
