"""Entidad Reservation - Agregado raíz del dominio."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum

from hotel_booking.domain.entities.payment import PaymentMethod
from hotel_booking.domain.errors import StateConflictError
from hotel_booking.domain.value_objects.reservation_code import ReservationCode
from hotel_booking.domain.value_objects.stay_period import StayPeriod


class ReservationStatus(str, Enum):
    """Estados posibles de una reservación."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"


class ReservationKind(str, Enum):
    """Variante de la reservación."""

    ONLINE = "ONLINE"
    WALK_IN = "WALK_IN"


# Estados que bloquean la habitación para otras reservas
ACTIVE_STATUSES = frozenset(
    {ReservationStatus.PENDING, ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN}
)

# Tabla de transiciones: evento -> (estados de origen, estado destino)
TRANSITIONS: dict[str, tuple[frozenset[ReservationStatus], ReservationStatus]] = {
    "confirm": (frozenset({ReservationStatus.PENDING}), ReservationStatus.CONFIRMED),
    "check in": (frozenset({ReservationStatus.CONFIRMED}), ReservationStatus.CHECKED_IN),
    "check out": (frozenset({ReservationStatus.CHECKED_IN}), ReservationStatus.CHECKED_OUT),
    "cancel": (ACTIVE_STATUSES, ReservationStatus.CANCELLED),
}

ID_PREFIXES = {ReservationKind.ONLINE: "ONL", ReservationKind.WALK_IN: "WLK"}
PAYMENT_METHODS = {
    ReservationKind.ONLINE: PaymentMethod.ONLINE_GATEWAY,
    ReservationKind.WALK_IN: PaymentMethod.POS,
}


@dataclass
class OnlineDetails:
    """Datos propios de una reservación hecha en línea."""

    email_sent: bool = False


@dataclass
class WalkInDetails:
    """Datos propios de una reservación hecha en recepción."""

    receipt_printed: bool = False


@dataclass
class Reservation:
    """
    Entidad principal del dominio - Agregado Raíz.

    Los campos del ciclo de vida son comunes; lo específico de cada variante
    vive en `details`, seleccionado por `kind`.
    """

    id: str = ""
    kind: ReservationKind = ReservationKind.ONLINE
    guest_id: int = 0
    room_id: int = 0

    check_in: date | None = None
    check_out: date | None = None

    # Fijado al crear; nunca se recalcula después de confirmar
    total_amount: Decimal = Decimal("0")
    currency_code: str = "USD"
    pricing_strategy: str | None = None

    status: ReservationStatus = ReservationStatus.PENDING
    payment_method: PaymentMethod = PaymentMethod.ONLINE_GATEWAY
    payment_transaction_id: str | None = None

    details: OnlineDetails | WalkInDetails = field(default_factory=OnlineDetails)

    # Control de concurrencia
    lock_version: int = 0

    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Factory ===

    @classmethod
    def create(
        cls,
        kind: ReservationKind,
        guest_id: int,
        room_id: int,
        stay: StayPeriod,
        total_amount: Decimal,
        currency_code: str = "USD",
        pricing_strategy: str | None = None,
        at: datetime | None = None,
    ) -> "Reservation":
        """Crea una reservación PENDING del tipo indicado con su id prefijado."""
        kind = ReservationKind(kind)
        now = at or datetime.now(timezone.utc)
        return cls(
            id=ReservationCode.generate(ID_PREFIXES[kind]).value,
            kind=kind,
            guest_id=guest_id,
            room_id=room_id,
            check_in=stay.check_in,
            check_out=stay.check_out,
            total_amount=total_amount,
            currency_code=currency_code,
            pricing_strategy=pricing_strategy,
            status=ReservationStatus.PENDING,
            payment_method=PAYMENT_METHODS[kind],
            details=OnlineDetails() if kind == ReservationKind.ONLINE else WalkInDetails(),
            created_at=now,
            updated_at=now,
        )

    # === Propiedades calculadas ===

    @property
    def stay(self) -> StayPeriod:
        return StayPeriod(check_in=self.check_in, check_out=self.check_out)

    @property
    def nights(self) -> int:
        if self.check_in and self.check_out:
            return (self.check_out - self.check_in).days
        return 0

    @property
    def is_active(self) -> bool:
        """Verifica si la reservación bloquea la habitación."""
        return self.status in ACTIVE_STATUSES

    @property
    def is_cancelled(self) -> bool:
        return self.status == ReservationStatus.CANCELLED

    @property
    def email_sent(self) -> bool:
        return isinstance(self.details, OnlineDetails) and self.details.email_sent

    @property
    def receipt_printed(self) -> bool:
        return isinstance(self.details, WalkInDetails) and self.details.receipt_printed

    # === Ciclo de vida ===

    def confirm(self, at: datetime | None = None) -> None:
        self._transition("confirm", at)

    def check_in_guest(self, at: datetime | None = None) -> None:
        self._transition("check in", at)

    def check_out_guest(self, at: datetime | None = None) -> None:
        self._transition("check out", at)

    def cancel(self, at: datetime | None = None) -> None:
        self._transition("cancel", at)

    def _transition(self, event: str, at: datetime | None) -> None:
        sources, target = TRANSITIONS[event]
        if self.status not in sources:
            raise StateConflictError(
                current_status=self.status.value,
                expected_status=sorted(status.value for status in sources),
                operation=f"{event} reservation {self.id}",
            )
        self.status = target
        self.updated_at = at or datetime.now(timezone.utc)
        self.lock_version += 1

    # === Bookkeeping por variante ===

    def record_payment(self, transaction_id: str) -> None:
        self.payment_transaction_id = transaction_id

    def mark_email_sent(self) -> None:
        if not isinstance(self.details, OnlineDetails):
            raise StateConflictError(self.kind.value, ReservationKind.ONLINE.value, "mark email sent")
        self.details.email_sent = True

    def mark_receipt_printed(self) -> None:
        if not isinstance(self.details, WalkInDetails):
            raise StateConflictError(
                self.kind.value, ReservationKind.WALK_IN.value, "mark receipt printed"
            )
        self.details.receipt_printed = True
