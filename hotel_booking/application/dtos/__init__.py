from hotel_booking.application.dtos.booking_dto import (
    BillView,
    BookingRequestDTO,
    GuestDTO,
    ReservationView,
    RoomView,
    WorkflowResult,
)

__all__ = [
    "BillView",
    "BookingRequestDTO",
    "GuestDTO",
    "ReservationView",
    "RoomView",
    "WorkflowResult",
]
