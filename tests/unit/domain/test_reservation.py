from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from hotel_booking.domain.entities.payment import PaymentMethod
from hotel_booking.domain.entities.reservation import (
    OnlineDetails,
    Reservation,
    ReservationKind,
    ReservationStatus,
    WalkInDetails,
)
from hotel_booking.domain.errors import StateConflictError
from hotel_booking.domain.value_objects.stay_period import StayPeriod

STAY = StayPeriod(date(2024, 1, 10), date(2024, 1, 13))
AT = datetime(2024, 1, 5, tzinfo=timezone.utc)


def make(kind=ReservationKind.ONLINE) -> Reservation:
    return Reservation.create(
        kind=kind,
        guest_id=1,
        room_id=101,
        stay=STAY,
        total_amount=Decimal("300.00"),
        pricing_strategy="STANDARD_RATE",
        at=AT,
    )


class TestCreate:
    def test_online_variant(self):
        reservation = make()
        assert reservation.id.startswith("ONL_")
        assert len(reservation.id) == len("ONL_") + 8
        assert reservation.status == ReservationStatus.PENDING
        assert reservation.payment_method == PaymentMethod.ONLINE_GATEWAY
        assert isinstance(reservation.details, OnlineDetails)
        assert reservation.nights == 3
        assert reservation.created_at == AT

    def test_walk_in_variant(self):
        reservation = make(ReservationKind.WALK_IN)
        assert reservation.id.startswith("WLK_")
        assert reservation.payment_method == PaymentMethod.POS
        assert isinstance(reservation.details, WalkInDetails)

    def test_ids_are_unique(self):
        assert len({make().id for _ in range(50)}) == 50


class TestLifecycle:
    def test_happy_path(self):
        reservation = make()
        reservation.confirm()
        reservation.check_in_guest()
        reservation.check_out_guest()
        assert reservation.status == ReservationStatus.CHECKED_OUT
        assert reservation.lock_version == 3

    @pytest.mark.parametrize(
        "steps",
        [
            [],
            ["confirm"],
            ["confirm", "check_in_guest"],
        ],
    )
    def test_cancel_from_active_states(self, steps):
        reservation = make()
        for step in steps:
            getattr(reservation, step)()
        reservation.cancel()
        assert reservation.is_cancelled
        assert not reservation.is_active

    def test_check_in_on_pending_is_rejected_without_mutation(self):
        reservation = make()
        before = (reservation.status, reservation.lock_version, reservation.updated_at)
        with pytest.raises(StateConflictError) as exc_info:
            reservation.check_in_guest()
        assert exc_info.value.code == "STATE_CONFLICT"
        assert exc_info.value.current_status == "PENDING"
        assert (reservation.status, reservation.lock_version, reservation.updated_at) == before

    def test_checked_out_cannot_be_cancelled(self):
        reservation = make()
        reservation.confirm()
        reservation.check_in_guest()
        reservation.check_out_guest()
        with pytest.raises(StateConflictError):
            reservation.cancel()

    def test_cancelled_is_terminal(self):
        reservation = make()
        reservation.cancel()
        for event in ("confirm", "check_in_guest", "check_out_guest", "cancel"):
            with pytest.raises(StateConflictError):
                getattr(reservation, event)()

    def test_transition_stamps_updated_at(self):
        reservation = make()
        later = datetime(2024, 1, 6, tzinfo=timezone.utc)
        reservation.confirm(at=later)
        assert reservation.updated_at == later


class TestVariantBookkeeping:
    def test_email_flag_only_for_online(self):
        online = make()
        online.mark_email_sent()
        assert online.email_sent
        assert online.status == ReservationStatus.PENDING

        walk_in = make(ReservationKind.WALK_IN)
        with pytest.raises(StateConflictError):
            walk_in.mark_email_sent()

    def test_receipt_flag_only_for_walk_in(self):
        walk_in = make(ReservationKind.WALK_IN)
        walk_in.mark_receipt_printed()
        assert walk_in.receipt_printed

        with pytest.raises(StateConflictError):
            make().mark_receipt_printed()
