from dataclasses import asdict
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, condecimal, constr

from hotel_booking.application.dtos.booking_dto import (
    BillView,
    GuestDTO,
    ReservationView,
    RoomView,
    WorkflowResult,
)

Money = condecimal(max_digits=12, decimal_places=2)


class GuestPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: constr(strip_whitespace=True, min_length=1, max_length=255)
    national_id: constr(strip_whitespace=True, min_length=1, max_length=20)
    phone: constr(strip_whitespace=True, min_length=1, max_length=50)
    email: EmailStr | None = None
    address: str | None = None

    def to_dto(self) -> GuestDTO:
        return GuestDTO(
            name=self.name,
            national_id=self.national_id,
            phone=self.phone,
            email=str(self.email) if self.email else None,
            address=self.address,
        )


class BookingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    guest: GuestPayload
    room_id: int = Field(gt=0)
    check_in: date
    check_out: date


class CheckOutRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    additional_charges: Money = Field(default=Decimal("0"), ge=0)


class PaymentChannelRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    channel: constr(strip_whitespace=True, min_length=1)


class PricingRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    strategy: constr(strip_whitespace=True, min_length=1) | None = None
    multiplier: Decimal | None = Field(default=None, gt=0)


class MaintenanceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    under_maintenance: bool


class ReservationResponse(BaseModel):
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
    payment_transaction_id: str | None = None
    pricing_strategy: str | None = None
    email_sent: bool
    receipt_printed: bool

    @classmethod
    def from_view(cls, view: ReservationView) -> "ReservationResponse":
        return cls(**asdict(view))


class BillResponse(BaseModel):
    reservation_id: str
    room_number: str
    nights: int
    nightly_rate: Decimal
    room_charges: Decimal
    additional_charges: Decimal
    total: Decimal
    currency_code: str

    @classmethod
    def from_view(cls, view: BillView) -> "BillResponse":
        return cls(**asdict(view))


class RoomResponse(BaseModel):
    id: int
    number: str
    room_type: str
    base_rate: Decimal
    status: str
    is_clean: bool

    @classmethod
    def from_view(cls, view: RoomView) -> "RoomResponse":
        return cls(**asdict(view))


class WorkflowResponse(BaseModel):
    success: bool
    message: str
    reservation: ReservationResponse | None = None
    bill: BillResponse | None = None
    rooms: list[RoomResponse] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: WorkflowResult) -> "WorkflowResponse":
        return cls(
            success=result.success,
            message=result.message,
            reservation=ReservationResponse.from_view(result.reservation)
            if result.reservation
            else None,
            bill=BillResponse.from_view(result.bill) if result.bill else None,
            rooms=[RoomResponse.from_view(room) for room in result.rooms],
            warnings=list(result.warnings),
        )


class PaymentChannelStatusResponse(BaseModel):
    selected: str
    available: list[str]
    description: str
