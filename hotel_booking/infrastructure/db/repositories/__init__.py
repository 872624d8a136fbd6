from hotel_booking.infrastructure.db.repositories.guest_repo_sql import GuestRepoSQL
from hotel_booking.infrastructure.db.repositories.reservation_repo_sql import ReservationRepoSQL
from hotel_booking.infrastructure.db.repositories.room_repo_sql import RoomRepoSQL

__all__ = ["GuestRepoSQL", "ReservationRepoSQL", "RoomRepoSQL"]
