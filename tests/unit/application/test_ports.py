"""
Los puertos son ABC: un adaptador incompleto falla al instanciarse.
"""

from decimal import Decimal

import pytest

from hotel_booking.application.interfaces import (
    GuestRepo,
    Notifier,
    PaymentChannel,
    ReservationRepo,
    RoomRepo,
)
from hotel_booking.domain.entities.payment import PaymentTransaction


@pytest.mark.parametrize("port", [RoomRepo, GuestRepo, ReservationRepo, Notifier, PaymentChannel])
def test_port_cannot_be_instantiated(port):
    with pytest.raises(TypeError):
        port()


def test_half_implemented_room_repo_fails_on_construction():
    class ReadOnlyRoomRepo(RoomRepo):
        async def get_by_id(self, room_id):
            return None

        async def list_all(self):
            return []

    with pytest.raises(TypeError) as exc_info:
        ReadOnlyRoomRepo()
    assert "update_status" in str(exc_info.value)


def test_channel_without_refund_fails_on_construction():
    class ChargeOnlyChannel(PaymentChannel):
        async def _authorize(self, amount: Decimal) -> PaymentTransaction:
            return PaymentTransaction(amount=amount, channel="TEST", success=True)

    with pytest.raises(TypeError) as exc_info:
        ChargeOnlyChannel()
    assert "_refund" in str(exc_info.value)
