from decimal import Decimal

import pytest

from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.room import Room, RoomStatus
from hotel_booking.domain.errors import StateConflictError


def test_status_write_bumps_version():
    room = Room(id=1, number="101", base_rate=Decimal("100"))
    room.update_status(RoomStatus.RESERVED)
    assert room.status == RoomStatus.RESERVED
    assert room.lock_version == 1


def test_maintenance_only_from_available():
    room = Room(id=1, number="101", base_rate=Decimal("100"))
    room.start_maintenance()
    assert room.status == RoomStatus.UNDER_MAINTENANCE
    room.finish_maintenance()
    assert room.is_available

    room.update_status(RoomStatus.OCCUPIED)
    with pytest.raises(StateConflictError):
        room.start_maintenance()
    with pytest.raises(StateConflictError):
        room.finish_maintenance()


def test_clean_flag():
    room = Room(id=1, number="101")
    room.mark_dirty()
    assert not room.is_clean
    room.mark_clean()
    assert room.is_clean


def test_guest_contact_update_reports_changes():
    guest = Guest(id=1, name="Nimal", national_id="901234567V", phone="0771234567")
    assert guest.update_contact(email="nimal@example.com")
    assert not guest.update_contact(phone="0771234567")
    assert guest.has_email
    assert guest.name == "Nimal"
