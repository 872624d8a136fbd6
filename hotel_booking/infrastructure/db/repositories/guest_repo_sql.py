from datetime import datetime, timezone

from sqlalchemy import insert, select, update

from hotel_booking.application.interfaces.guest_repo import GuestRepo
from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.errors import GuestNotFoundError
from hotel_booking.infrastructure.db.engine import SessionScope
from hotel_booking.infrastructure.db.tables import guests


class GuestRepoSQL(GuestRepo):
    def __init__(self, sessions: SessionScope) -> None:
        self._sessions = sessions

    async def get_by_id(self, guest_id: int) -> Guest | None:
        return await self._fetch_one(guests.c.id == guest_id)

    async def find_by_national_id(self, national_id: str) -> Guest | None:
        return await self._fetch_one(guests.c.national_id == national_id)

    async def save(self, guest: Guest) -> Guest:
        guest.created_at = guest.created_at or datetime.now(timezone.utc)
        values = {
            "name": guest.name,
            "national_id": guest.national_id,
            "phone": guest.phone,
            "email": guest.email,
            "address": guest.address,
            "created_at": guest.created_at,
        }
        async with self._sessions.transaction() as session:
            result = await session.execute(insert(guests).values(values))
        guest.id = result.inserted_primary_key[0]
        return guest

    async def update_contact(self, guest: Guest) -> None:
        stmt = (
            update(guests)
            .where(guests.c.id == guest.id)
            .values(phone=guest.phone, email=guest.email, address=guest.address)
        )
        async with self._sessions.transaction() as session:
            result = await session.execute(stmt)
        if result.rowcount == 0:
            raise GuestNotFoundError(guest.id)

    async def _fetch_one(self, condition) -> Guest | None:
        async with self._sessions.transaction() as session:
            result = await session.execute(select(guests).where(condition).limit(1))
            row = result.mappings().first()
        if not row:
            return None
        return Guest(
            id=row["id"],
            name=row["name"],
            national_id=row["national_id"],
            phone=row["phone"],
            email=row["email"],
            address=row["address"],
            created_at=row["created_at"],
        )
