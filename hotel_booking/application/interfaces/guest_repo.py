"""Interface GuestRepo - Puerto para repositorio de huéspedes."""

from abc import ABC, abstractmethod

from hotel_booking.domain.entities.guest import Guest


class GuestRepo(ABC):
    @abstractmethod
    async def get_by_id(self, guest_id: int) -> Guest | None:
        raise NotImplementedError

    @abstractmethod
    async def find_by_national_id(self, national_id: str) -> Guest | None:
        raise NotImplementedError

    @abstractmethod
    async def save(self, guest: Guest) -> Guest:
        """Asigna el id y persiste al huésped."""
        raise NotImplementedError

    @abstractmethod
    async def update_contact(self, guest: Guest) -> None:
        raise NotImplementedError
