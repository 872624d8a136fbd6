import asyncio

from hotel_booking.config import get_settings
from hotel_booking.infrastructure.db.engine import build_engine
from hotel_booking.infrastructure.db.tables import metadata


async def reset():
    engine = build_engine(get_settings())
    async with engine.begin() as conn:
        for table in reversed(metadata.sorted_tables):
            print(f"Dropping {table.name}")
        await conn.run_sync(metadata.drop_all)
        await conn.run_sync(metadata.create_all)
        print("Recreated all tables.")
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(reset())
