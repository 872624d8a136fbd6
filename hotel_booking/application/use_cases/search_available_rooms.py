from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.room_availability import RoomAvailability
from hotel_booking.domain.entities.room import Room, RoomType
from hotel_booking.domain.errors import ValidationError
from hotel_booking.domain.value_objects.stay_period import StayPeriod


class SearchAvailableRoomsUseCase:
    def __init__(
        self,
        room_availability: RoomAvailability,
        transaction_manager: TransactionManager,
    ) -> None:
        self._room_availability = room_availability
        self._transaction_manager = transaction_manager

    async def execute(
        self,
        check_in: str,
        check_out: str,
        room_type: str | RoomType | None = None,
    ) -> list[Room]:
        stay = StayPeriod.from_strings(check_in, check_out)
        wanted_type = None
        if room_type:
            try:
                wanted_type = RoomType(str(room_type).strip().upper())
            except ValueError as exc:
                raise ValidationError("room_type", f"unknown room type '{room_type}'") from exc
        async with self._transaction_manager.start():
            return await self._room_availability.search_available(
                stay.check_in, stay.check_out, wanted_type
            )
