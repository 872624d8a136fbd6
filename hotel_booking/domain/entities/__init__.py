"""Entidades del dominio de reservaciones."""

from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.payment import PaymentMethod, PaymentTransaction, TransactionKind
from hotel_booking.domain.entities.reservation import (
    ACTIVE_STATUSES,
    OnlineDetails,
    Reservation,
    ReservationKind,
    ReservationStatus,
    WalkInDetails,
)
from hotel_booking.domain.entities.room import Room, RoomStatus, RoomType

__all__ = [
    # Reservation
    "Reservation",
    "ReservationKind",
    "ReservationStatus",
    "OnlineDetails",
    "WalkInDetails",
    "ACTIVE_STATUSES",
    # Room
    "Room",
    "RoomStatus",
    "RoomType",
    # Guest
    "Guest",
    # Payment
    "PaymentTransaction",
    "PaymentMethod",
    "TransactionKind",
]
