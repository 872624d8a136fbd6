"""Implementación SQL del repositorio de habitaciones."""

from datetime import datetime, timezone

from sqlalchemy import insert, select, update

from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.domain.entities.room import Room, RoomStatus, RoomType
from hotel_booking.domain.errors import OptimisticLockError, RoomNotFoundError
from hotel_booking.infrastructure.db.engine import SessionScope
from hotel_booking.infrastructure.db.tables import rooms


class RoomRepoSQL(RoomRepo):
    def __init__(self, sessions: SessionScope) -> None:
        self._sessions = sessions

    async def get_by_id(self, room_id: int) -> Room | None:
        async with self._sessions.transaction() as session:
            result = await session.execute(select(rooms).where(rooms.c.id == room_id))
            row = result.mappings().first()
        return self._row_to_room(row) if row else None

    async def list_all(self) -> list[Room]:
        async with self._sessions.transaction() as session:
            result = await session.execute(select(rooms).order_by(rooms.c.id))
            rows = result.mappings().all()
        return [self._row_to_room(row) for row in rows]

    async def save(self, room: Room) -> Room:
        now = datetime.now(timezone.utc)
        values = {
            "room_number": room.number,
            "room_type": room.room_type.value,
            "base_rate": room.base_rate,
            "status": room.status.value,
            "is_clean": room.is_clean,
            "lock_version": room.lock_version,
            "created_at": room.created_at or now,
            "updated_at": room.updated_at or now,
        }
        if room.id is not None:
            values["id"] = room.id
        async with self._sessions.transaction() as session:
            result = await session.execute(insert(rooms).values(values))
        room.id = result.inserted_primary_key[0]
        return room

    async def update_status(
        self,
        room_id: int,
        status: RoomStatus,
        expected_status: RoomStatus | None = None,
        expected_lock_version: int | None = None,
    ) -> Room:
        where_clause = [rooms.c.id == room_id]
        if expected_status is not None:
            where_clause.append(rooms.c.status == expected_status.value)
        if expected_lock_version is not None:
            where_clause.append(rooms.c.lock_version == expected_lock_version)
        stmt = (
            update(rooms)
            .where(*where_clause)
            .values(
                status=RoomStatus(status).value,
                lock_version=rooms.c.lock_version + 1,
                updated_at=datetime.now(timezone.utc),
            )
        )
        async with self._sessions.transaction() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                current = await self.get_by_id(room_id)
                if current is None:
                    raise RoomNotFoundError(room_id)
                raise OptimisticLockError(
                    "room",
                    room_id,
                    expected_lock_version if expected_lock_version is not None else expected_status,
                    current.lock_version if expected_lock_version is not None else current.status,
                )
            updated = await self.get_by_id(room_id)
        return updated

    async def mark_clean(self, room_id: int) -> Room:
        return await self._set_clean(room_id, True)

    async def mark_dirty(self, room_id: int) -> Room:
        return await self._set_clean(room_id, False)

    async def _set_clean(self, room_id: int, is_clean: bool) -> Room:
        stmt = (
            update(rooms)
            .where(rooms.c.id == room_id)
            .values(is_clean=is_clean, updated_at=datetime.now(timezone.utc))
        )
        async with self._sessions.transaction() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                raise RoomNotFoundError(room_id)
            updated = await self.get_by_id(room_id)
        return updated

    def _row_to_room(self, row) -> Room:
        return Room(
            id=row["id"],
            number=row["room_number"],
            room_type=RoomType(row["room_type"]),
            base_rate=row["base_rate"],
            status=RoomStatus(row["status"]),
            is_clean=bool(row["is_clean"]),
            lock_version=row["lock_version"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
