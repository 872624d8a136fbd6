"""Puertos consumidos por el motor de reservaciones."""

from hotel_booking.application.interfaces.clock import Clock, FakeClock, SystemClock
from hotel_booking.application.interfaces.guest_repo import GuestRepo
from hotel_booking.application.interfaces.notifier import Notifier
from hotel_booking.application.interfaces.payment_channel import PaymentChannel
from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    "Clock",
    "FakeClock",
    "SystemClock",
    "GuestRepo",
    "Notifier",
    "PaymentChannel",
    "ReservationRepo",
    "RoomRepo",
    "TransactionManager",
]
