"""Value Objects del dominio de reservaciones."""

from hotel_booking.domain.value_objects.money import Money, quantize
from hotel_booking.domain.value_objects.reservation_code import ReservationCode
from hotel_booking.domain.value_objects.stay_period import StayPeriod

__all__ = [
    "Money",
    "ReservationCode",
    "StayPeriod",
    "quantize",
]
