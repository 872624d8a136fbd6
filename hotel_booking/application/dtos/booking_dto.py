"""DTOs de entrada y vistas de salida del motor de reservaciones."""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal

from pydantic import validate_email
from pydantic_core import PydanticCustomError

from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.reservation import Reservation, ReservationKind
from hotel_booking.domain.entities.room import Room
from hotel_booking.domain.errors import ValidationError


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class GuestDTO:
    """Datos del huésped tal como llegan en la solicitud de reserva."""

    name: str = ""
    national_id: str = ""
    phone: str = ""
    email: str | None = None
    address: str | None = None

    def normalized(self) -> "GuestDTO":
        """Retorna una copia sin espacios sobrantes; ValidationError si falta algo."""
        cleaned = replace(
            self,
            name=_clean(self.name),
            national_id=_clean(self.national_id),
            phone=_clean(self.phone),
            email=_clean(self.email),
            address=_clean(self.address),
        )
        for field_name in ("name", "national_id", "phone"):
            if not getattr(cleaned, field_name):
                raise ValidationError(field_name, "is required")
        if cleaned.email is not None:
            try:
                _, cleaned.email = validate_email(cleaned.email)
            except PydanticCustomError as exc:
                raise ValidationError("email", f"invalid email address '{self.email}'") from exc
        return cleaned

    def to_guest(self) -> Guest:
        return Guest(
            name=self.name,
            national_id=self.national_id,
            phone=self.phone,
            email=self.email,
            address=self.address,
        )


@dataclass
class BookingRequestDTO:
    """Solicitud de reserva; las fechas llegan como texto ISO."""

    kind: ReservationKind
    guest: GuestDTO
    room_id: int
    check_in: str
    check_out: str


@dataclass(frozen=True)
class ReservationView:
    id: str
    kind: str
    guest_id: int
    room_id: int
    check_in: date
    check_out: date
    nights: int
    total_amount: Decimal
    currency_code: str
    status: str
    payment_method: str
    payment_transaction_id: str | None
    pricing_strategy: str | None
    email_sent: bool
    receipt_printed: bool

    @classmethod
    def from_reservation(cls, reservation: Reservation) -> "ReservationView":
        return cls(
            id=reservation.id,
            kind=reservation.kind.value,
            guest_id=reservation.guest_id,
            room_id=reservation.room_id,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            nights=reservation.nights,
            total_amount=reservation.total_amount,
            currency_code=reservation.currency_code,
            status=reservation.status.value,
            payment_method=reservation.payment_method.value,
            payment_transaction_id=reservation.payment_transaction_id,
            pricing_strategy=reservation.pricing_strategy,
            email_sent=reservation.email_sent,
            receipt_printed=reservation.receipt_printed,
        )


@dataclass(frozen=True)
class BillView:
    """Factura de salida."""

    reservation_id: str
    room_number: str
    nights: int
    nightly_rate: Decimal
    room_charges: Decimal
    additional_charges: Decimal
    total: Decimal
    currency_code: str


@dataclass(frozen=True)
class RoomView:
    id: int
    number: str
    room_type: str
    base_rate: Decimal
    status: str
    is_clean: bool

    @classmethod
    def from_room(cls, room: Room) -> "RoomView":
        return cls(
            id=room.id,
            number=room.number,
            room_type=room.room_type.value,
            base_rate=room.base_rate,
            status=room.status.value,
            is_clean=room.is_clean,
        )


@dataclass
class WorkflowResult:
    """
    Resultado de un flujo del orquestador.

    Los errores de dominio nunca escapan del orquestador: se reportan con
    `success=False` y `code` igual al código del error.
    """

    success: bool
    message: str
    reservation: ReservationView | None = None
    bill: BillView | None = None
    rooms: list[RoomView] = field(default_factory=list)
    code: str | None = None
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, message: str, **kwargs) -> "WorkflowResult":
        return cls(success=True, message=message, **kwargs)

    @classmethod
    def failed(cls, message: str, code: str) -> "WorkflowResult":
        return cls(success=False, message=message, code=code)
