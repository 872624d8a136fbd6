"""
Repositorios SQL contra una base SQLite (aiosqlite) en un archivo temporal.

Verifica el mapeo fila <-> entidad, las escrituras condicionales y el flujo
completo del orquestador sobre la misma base.
"""

from datetime import date
from decimal import Decimal

import pytest
import pytest_asyncio

from hotel_booking.api.dependencies import build_container
from hotel_booking.config import Settings
from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.reservation import Reservation, ReservationKind, ReservationStatus
from hotel_booking.domain.entities.room import Room, RoomStatus, RoomType
from hotel_booking.domain.errors import OptimisticLockError, ReservationNotFoundError, RoomNotFoundError
from hotel_booking.domain.value_objects.stay_period import StayPeriod
from hotel_booking.infrastructure.db.engine import SessionScope, build_engine, build_session_factory
from hotel_booking.infrastructure.db.repositories import GuestRepoSQL, ReservationRepoSQL, RoomRepoSQL
from hotel_booking.infrastructure.db.tables import metadata


@pytest.fixture
def sql_settings(tmp_path) -> Settings:
    return Settings(
        use_in_memory=False,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'hotel.db'}",
        seed_demo_rooms=True,
        pos_decline_rate=0.0,
        gateway_decline_rate=0.0,
        reserve_retry_delay_seconds=0,
    )


@pytest_asyncio.fixture
async def sessions(sql_settings):
    engine = build_engine(sql_settings)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield SessionScope(build_session_factory(engine))
    await engine.dispose()


@pytest_asyncio.fixture
async def rooms_sql(sessions):
    repo = RoomRepoSQL(sessions)
    await repo.save(Room(id=101, number="101", room_type=RoomType.SINGLE, base_rate=Decimal("100.00")))
    return repo


def new_reservation(room_id=101, check_in=date(2024, 1, 10), check_out=date(2024, 1, 13)):
    return Reservation.create(
        kind=ReservationKind.WALK_IN,
        guest_id=1,
        room_id=room_id,
        stay=StayPeriod(check_in, check_out),
        total_amount=Decimal("300.00"),
    )


class TestRoomRepoSQL:
    async def test_round_trip(self, rooms_sql):
        room = await rooms_sql.get_by_id(101)
        assert room.number == "101"
        assert room.room_type == RoomType.SINGLE
        assert room.base_rate == Decimal("100.00")
        assert room.status == RoomStatus.AVAILABLE
        assert room.is_clean
        assert [r.id for r in await rooms_sql.list_all()] == [101]

    async def test_conditional_update(self, rooms_sql):
        updated = await rooms_sql.update_status(
            101, RoomStatus.RESERVED, expected_status=RoomStatus.AVAILABLE, expected_lock_version=0
        )
        assert updated.status == RoomStatus.RESERVED
        assert updated.lock_version == 1

        with pytest.raises(OptimisticLockError):
            await rooms_sql.update_status(
                101, RoomStatus.RESERVED, expected_status=RoomStatus.AVAILABLE, expected_lock_version=0
            )
        assert (await rooms_sql.get_by_id(101)).lock_version == 1

    async def test_missing_room(self, rooms_sql):
        with pytest.raises(RoomNotFoundError):
            await rooms_sql.update_status(999, RoomStatus.RESERVED)
        with pytest.raises(RoomNotFoundError):
            await rooms_sql.mark_dirty(999)

    async def test_cleanliness(self, rooms_sql):
        assert not (await rooms_sql.mark_dirty(101)).is_clean
        assert (await rooms_sql.mark_clean(101)).is_clean


class TestReservationRepoSQL:
    async def test_save_and_load(self, sessions):
        repo = ReservationRepoSQL(sessions)
        reservation = new_reservation()
        reservation.confirm()
        reservation.record_payment("POS_0123456789AB")
        reservation.mark_receipt_printed()
        await repo.save(reservation)

        loaded = await repo.get_by_id(reservation.id)
        assert loaded.id.startswith("WLK_")
        assert loaded.kind == ReservationKind.WALK_IN
        assert loaded.status == ReservationStatus.CONFIRMED
        assert loaded.check_in == date(2024, 1, 10)
        assert loaded.total_amount == Decimal("300.00")
        assert loaded.payment_transaction_id == "POS_0123456789AB"
        assert loaded.receipt_printed
        assert await repo.get_by_id("WLK_missing") is None

    async def test_overlap_is_half_open(self, sessions):
        repo = ReservationRepoSQL(sessions)
        await repo.save(new_reservation())

        assert await repo.find_by_room_and_date_range(101, date(2024, 1, 12), date(2024, 1, 15))
        assert await repo.find_by_room_and_date_range(101, date(2024, 1, 13), date(2024, 1, 15)) == []
        assert await repo.find_by_room_and_date_range(101, date(2024, 1, 8), date(2024, 1, 10)) == []
        assert await repo.find_by_room_and_date_range(102, date(2024, 1, 10), date(2024, 1, 13)) == []

    async def test_cancelled_reservations_do_not_block(self, sessions):
        repo = ReservationRepoSQL(sessions)
        reservation = new_reservation()
        await repo.save(reservation)
        reservation.cancel()
        await repo.update(reservation, expected_lock_version=0)
        assert await repo.find_by_room_and_date_range(101, date(2024, 1, 10), date(2024, 1, 13)) == []

    async def test_update_checks_version(self, sessions):
        repo = ReservationRepoSQL(sessions)
        reservation = new_reservation()
        await repo.save(reservation)
        reservation.confirm()
        await repo.update(reservation, expected_lock_version=0)

        with pytest.raises(OptimisticLockError):
            await repo.update(reservation, expected_lock_version=0)
        with pytest.raises(ReservationNotFoundError):
            await repo.update(new_reservation())


class TestGuestRepoSQL:
    async def test_save_find_and_update(self, sessions):
        repo = GuestRepoSQL(sessions)
        guest = await repo.save(Guest(name="Nimal", national_id="901234567V", phone="077"))
        assert guest.id is not None

        guest.email = "nimal@example.com"
        await repo.update_contact(guest)
        found = await repo.find_by_national_id("901234567V")
        assert found.id == guest.id
        assert found.email == "nimal@example.com"
        assert await repo.find_by_national_id("000") is None


class TestTransactionScope:
    async def test_failed_unit_of_work_rolls_back(self, sessions, rooms_sql):
        with pytest.raises(RuntimeError):
            async with sessions.transaction():
                await rooms_sql.update_status(101, RoomStatus.OCCUPIED)
                raise RuntimeError("boom")
        assert (await rooms_sql.get_by_id(101)).status == RoomStatus.AVAILABLE


class TestOrchestratorOverSQL:
    async def test_booking_lifecycle(self, sql_settings, guest):
        container = build_container(sql_settings)
        await container.ensure_ready()
        orchestrator = container.orchestrator
        try:
            booked = await orchestrator.make_walk_in_reservation(
                guest, 101, "2024-01-10", "2024-01-13"
            )
            assert booked.success, booked.message
            reservation_id = booked.reservation.id
            assert booked.reservation.total_amount == Decimal("300.00")
            assert (await container.room_repo.get_by_id(101)).status == RoomStatus.RESERVED

            clash = await orchestrator.make_walk_in_reservation(
                guest, 101, "2024-01-11", "2024-01-12"
            )
            assert clash.code == "ROOM_UNAVAILABLE"

            assert (await orchestrator.check_in(reservation_id)).success
            checked_out = await orchestrator.check_out(reservation_id, Decimal("20.00"))
            assert checked_out.success
            assert checked_out.bill.total == Decimal("320.00")

            room = await container.room_repo.get_by_id(101)
            assert room.status == RoomStatus.AVAILABLE
            assert not room.is_clean
        finally:
            await container.close()
