"""Entidad Room - habitación del hotel."""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from hotel_booking.domain.errors import StateConflictError


class RoomStatus(str, Enum):
    """Estados posibles de una habitación."""

    AVAILABLE = "AVAILABLE"
    RESERVED = "RESERVED"
    OCCUPIED = "OCCUPIED"
    UNDER_MAINTENANCE = "UNDER_MAINTENANCE"


class RoomType(str, Enum):
    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    SUITE = "SUITE"
    DELUXE = "DELUXE"


@dataclass
class Room:
    """
    Habitación del inventario.

    El estado sólo cambia mediante el orquestador de reservas o una acción
    explícita de mantenimiento.
    """

    id: int | None = None
    number: str = ""
    room_type: RoomType = RoomType.SINGLE
    base_rate: Decimal = Decimal("0")
    status: RoomStatus = RoomStatus.AVAILABLE
    is_clean: bool = True

    # Control de concurrencia
    lock_version: int = 0

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_available(self) -> bool:
        return self.status == RoomStatus.AVAILABLE

    def update_status(self, status: RoomStatus, at: datetime | None = None) -> None:
        """Cambia el estado y sella la versión."""
        self.status = RoomStatus(status)
        self.updated_at = at or datetime.now(timezone.utc)
        self.lock_version += 1

    def mark_clean(self, at: datetime | None = None) -> None:
        self.is_clean = True
        self.updated_at = at or datetime.now(timezone.utc)

    def mark_dirty(self, at: datetime | None = None) -> None:
        self.is_clean = False
        self.updated_at = at or datetime.now(timezone.utc)

    def start_maintenance(self, at: datetime | None = None) -> None:
        """Saca la habitación de servicio; sólo desde AVAILABLE."""
        if self.status != RoomStatus.AVAILABLE:
            raise StateConflictError(self.status.value, RoomStatus.AVAILABLE.value, "start maintenance")
        self.update_status(RoomStatus.UNDER_MAINTENANCE, at)

    def finish_maintenance(self, at: datetime | None = None) -> None:
        if self.status != RoomStatus.UNDER_MAINTENANCE:
            raise StateConflictError(
                self.status.value, RoomStatus.UNDER_MAINTENANCE.value, "finish maintenance"
            )
        self.update_status(RoomStatus.AVAILABLE, at)
