import asyncio

from hotel_booking.config import get_settings
from hotel_booking.infrastructure.db.engine import SessionScope, build_engine, build_session_factory
from hotel_booking.infrastructure.db.repositories import RoomRepoSQL
from hotel_booking.infrastructure.db.tables import metadata
from hotel_booking.infrastructure.seed import seed_demo_rooms


async def seed():
    engine = build_engine(get_settings())
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
        print("Created missing tables.")

    room_repo = RoomRepoSQL(SessionScope(build_session_factory(engine)))
    seeded = await seed_demo_rooms(room_repo)
    print(f"Seeded {seeded} demo rooms." if seeded else "Rooms already present, nothing seeded.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(seed())
