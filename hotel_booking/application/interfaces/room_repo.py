"""Interface RoomRepo - Puerto para repositorio de habitaciones."""

from abc import ABC, abstractmethod

from hotel_booking.domain.entities.room import Room, RoomStatus


class RoomRepo(ABC):
    @abstractmethod
    async def get_by_id(self, room_id: int) -> Room | None:
        raise NotImplementedError

    @abstractmethod
    async def list_all(self) -> list[Room]:
        raise NotImplementedError

    @abstractmethod
    async def save(self, room: Room) -> Room:
        raise NotImplementedError

    @abstractmethod
    async def update_status(
        self,
        room_id: int,
        status: RoomStatus,
        expected_status: RoomStatus | None = None,
        expected_lock_version: int | None = None,
    ) -> Room:
        """
        Escritura condicional del estado.

        Lanza OptimisticLockError si el estado o la versión actuales no
        coinciden con lo esperado, y RoomNotFoundError si no existe.
        """
        raise NotImplementedError

    @abstractmethod
    async def mark_clean(self, room_id: int) -> Room:
        raise NotImplementedError

    @abstractmethod
    async def mark_dirty(self, room_id: int) -> Room:
        raise NotImplementedError
