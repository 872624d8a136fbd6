"""Interface Notifier - Puerto para correos y recibos impresos."""

from abc import ABC, abstractmethod
from decimal import Decimal

from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.reservation import Reservation
from hotel_booking.domain.entities.room import Room


class Notifier(ABC):
    """Entrega de correos y recibos; fire-and-forget, los errores sólo se registran."""

    @abstractmethod
    async def send_confirmation(self, guest: Guest, reservation: Reservation) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def print_receipt(self, guest: Guest, reservation: Reservation, room: Room) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def send_cancellation(
        self, guest: Guest, reservation: Reservation, refund_amount: Decimal
    ) -> bool:
        raise NotImplementedError

    @abstractmethod
    async def print_checkout_bill(
        self,
        guest: Guest,
        reservation: Reservation,
        room: Room,
        additional_charges: Decimal,
    ) -> bool:
        raise NotImplementedError
