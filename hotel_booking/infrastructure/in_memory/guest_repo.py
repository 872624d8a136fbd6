from copy import deepcopy
from datetime import datetime, timezone

from hotel_booking.application.interfaces.guest_repo import GuestRepo
from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.errors import GuestNotFoundError


class InMemoryGuestRepo(GuestRepo):
    def __init__(self) -> None:
        self.guests: dict[int, Guest] = {}
        self._next_id = 1

    async def get_by_id(self, guest_id: int) -> Guest | None:
        guest = self.guests.get(guest_id)
        return deepcopy(guest) if guest else None

    async def find_by_national_id(self, national_id: str) -> Guest | None:
        for guest in self.guests.values():
            if guest.national_id == national_id:
                return deepcopy(guest)
        return None

    async def save(self, guest: Guest) -> Guest:
        if guest.id is None:
            guest.id = self._next_id
        self._next_id = max(self._next_id, guest.id + 1)
        guest.created_at = guest.created_at or datetime.now(timezone.utc)
        self.guests[guest.id] = deepcopy(guest)
        return guest

    async def update_contact(self, guest: Guest) -> None:
        current = self.guests.get(guest.id)
        if current is None:
            raise GuestNotFoundError(guest.id)
        current.update_contact(phone=guest.phone, email=guest.email, address=guest.address)
