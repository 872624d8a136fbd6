from copy import deepcopy
from datetime import datetime, timezone

from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.domain.entities.room import Room, RoomStatus
from hotel_booking.domain.errors import OptimisticLockError, RoomNotFoundError


class InMemoryRoomRepo(RoomRepo):
    def __init__(self) -> None:
        self.rooms: dict[int, Room] = {}
        self._next_id = 1

    async def get_by_id(self, room_id: int) -> Room | None:
        room = self.rooms.get(room_id)
        return deepcopy(room) if room else None

    async def list_all(self) -> list[Room]:
        return [deepcopy(room) for _, room in sorted(self.rooms.items())]

    async def save(self, room: Room) -> Room:
        if room.id is None:
            room.id = self._next_id
        if room.id in self.rooms:
            raise ValueError(f"Room id already exists: {room.id}")
        self._next_id = max(self._next_id, room.id + 1)
        now = datetime.now(timezone.utc)
        room.created_at = room.created_at or now
        room.updated_at = room.updated_at or now
        self.rooms[room.id] = deepcopy(room)
        return room

    async def update_status(
        self,
        room_id: int,
        status: RoomStatus,
        expected_status: RoomStatus | None = None,
        expected_lock_version: int | None = None,
    ) -> Room:
        room = self._require(room_id)
        if expected_status is not None and room.status != expected_status:
            raise OptimisticLockError("room", room_id, expected_status.value, room.status.value)
        if expected_lock_version is not None and room.lock_version != expected_lock_version:
            raise OptimisticLockError("room", room_id, expected_lock_version, room.lock_version)
        room.update_status(status)
        return deepcopy(room)

    async def mark_clean(self, room_id: int) -> Room:
        room = self._require(room_id)
        room.mark_clean()
        return deepcopy(room)

    async def mark_dirty(self, room_id: int) -> Room:
        room = self._require(room_id)
        room.mark_dirty()
        return deepcopy(room)

    def _require(self, room_id: int) -> Room:
        room = self.rooms.get(room_id)
        if room is None:
            raise RoomNotFoundError(room_id)
        return room
