from hotel_booking.infrastructure.in_memory.guest_repo import InMemoryGuestRepo
from hotel_booking.infrastructure.in_memory.reservation_repo import InMemoryReservationRepo
from hotel_booking.infrastructure.in_memory.room_repo import InMemoryRoomRepo
from hotel_booking.infrastructure.in_memory.transaction_manager import NoopTransactionManager

__all__ = [
    "InMemoryGuestRepo",
    "InMemoryReservationRepo",
    "InMemoryRoomRepo",
    "NoopTransactionManager",
]
