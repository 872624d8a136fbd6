from datetime import date
from decimal import Decimal

import pytest

from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.reservation import Reservation, ReservationKind, ReservationStatus
from hotel_booking.domain.entities.room import RoomStatus
from hotel_booking.domain.errors import (
    GuestNotFoundError,
    OptimisticLockError,
    ReservationNotFoundError,
    RoomNotFoundError,
)
from hotel_booking.domain.value_objects.stay_period import StayPeriod


def new_reservation(room_id=101):
    return Reservation.create(
        kind=ReservationKind.ONLINE,
        guest_id=1,
        room_id=room_id,
        stay=StayPeriod(date(2024, 1, 10), date(2024, 1, 13)),
        total_amount=Decimal("300.00"),
    )


class TestInMemoryRoomRepo:
    async def test_conditional_status_write(self, room_repo):
        room = await room_repo.update_status(
            101, RoomStatus.RESERVED, expected_status=RoomStatus.AVAILABLE, expected_lock_version=0
        )
        assert room.status == RoomStatus.RESERVED

        with pytest.raises(OptimisticLockError):
            await room_repo.update_status(
                101, RoomStatus.RESERVED, expected_status=RoomStatus.AVAILABLE
            )
        with pytest.raises(OptimisticLockError):
            await room_repo.update_status(101, RoomStatus.OCCUPIED, expected_lock_version=0)

    async def test_unknown_room(self, room_repo):
        with pytest.raises(RoomNotFoundError):
            await room_repo.update_status(999, RoomStatus.RESERVED)

    async def test_returned_rooms_are_copies(self, room_repo):
        room = await room_repo.get_by_id(101)
        room.update_status(RoomStatus.OCCUPIED)
        assert (await room_repo.get_by_id(101)).status == RoomStatus.AVAILABLE


class TestInMemoryReservationRepo:
    async def test_duplicate_id_rejected(self, reservation_repo):
        reservation = new_reservation()
        await reservation_repo.save(reservation)
        with pytest.raises(ValueError):
            await reservation_repo.save(reservation)

    async def test_update_checks_version(self, reservation_repo):
        reservation = await reservation_repo.save(new_reservation())
        reservation.confirm()
        await reservation_repo.update(reservation, expected_lock_version=0)

        stale = await reservation_repo.get_by_id(reservation.id)
        stale.lock_version = 0
        with pytest.raises(OptimisticLockError):
            await reservation_repo.update(stale, expected_lock_version=0)
        assert (await reservation_repo.get_by_id(reservation.id)).status == ReservationStatus.CONFIRMED

    async def test_update_unknown(self, reservation_repo):
        with pytest.raises(ReservationNotFoundError):
            await reservation_repo.update(new_reservation())

    async def test_find_by_room_and_date_range(self, reservation_repo):
        await reservation_repo.save(new_reservation(101))
        await reservation_repo.save(new_reservation(102))
        found = await reservation_repo.find_by_room_and_date_range(
            101, date(2024, 1, 12), date(2024, 1, 20)
        )
        assert len(found) == 1
        assert found[0].room_id == 101
        assert await reservation_repo.find_by_room_and_date_range(
            101, date(2024, 1, 13), date(2024, 1, 20)
        ) == []


class TestInMemoryGuestRepo:
    async def test_save_and_find(self, guest_repo):
        guest = await guest_repo.save(Guest(name="Nimal", national_id="901234567V", phone="077"))
        assert guest.id == 1
        found = await guest_repo.find_by_national_id("901234567V")
        assert found.name == "Nimal"
        assert await guest_repo.find_by_national_id("000") is None

    async def test_update_contact(self, guest_repo):
        guest = await guest_repo.save(Guest(name="Nimal", national_id="901234567V", phone="077"))
        guest.update_contact(email="nimal@example.com")
        await guest_repo.update_contact(guest)
        assert (await guest_repo.get_by_id(guest.id)).email == "nimal@example.com"

    async def test_update_contact_unknown(self, guest_repo):
        with pytest.raises(GuestNotFoundError):
            await guest_repo.update_contact(Guest(id=42, name="X", national_id="X", phone="1"))
