"""Excepciones de dominio para el motor de reservaciones de hotel."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validation failed for '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field


class InvalidDateRangeError(ValidationError):
    """Rango de fechas inválido (check-out debe ser posterior al check-in)."""

    def __init__(self, message: str):
        super().__init__(field="check_out", message=message)


class InvalidMoneyError(ValidationError):
    """Monto monetario inválido."""

    def __init__(self, message: str, field: str = "amount"):
        super().__init__(field=field, message=message)


# === Errores de Búsqueda ===


class NotFoundError(DomainError):
    """La entidad solicitada no existe."""

    def __init__(self, entity: str, identifier: object):
        super().__init__(
            message=f"{entity} not found: {identifier}",
            code="NOT_FOUND",
        )
        self.entity = entity
        self.identifier = identifier


class ReservationNotFoundError(NotFoundError):
    def __init__(self, reservation_id: str):
        super().__init__(entity="Reservation", identifier=reservation_id)
        self.reservation_id = reservation_id


class RoomNotFoundError(NotFoundError):
    def __init__(self, room_id: int):
        super().__init__(entity="Room", identifier=room_id)
        self.room_id = room_id


class GuestNotFoundError(NotFoundError):
    def __init__(self, guest_id: int):
        super().__init__(entity="Guest", identifier=guest_id)
        self.guest_id = guest_id


# === Errores de Habitación ===


class RoomUnavailableError(DomainError):
    """La habitación no existe o ya está ocupada en el rango de fechas."""

    def __init__(self, room_id: int, reason: str):
        super().__init__(
            message=f"Room {room_id} is not available: {reason}",
            code="ROOM_UNAVAILABLE",
        )
        self.room_id = room_id
        self.reason = reason


# === Errores de Pago ===


class PaymentDeclinedError(DomainError):
    """El canal de pago rechazó el cargo o falló al procesarlo."""

    def __init__(self, channel: str, amount: object, reason: str | None = None):
        detail = f": {reason}" if reason else ""
        super().__init__(
            message=f"Payment of {amount} declined by {channel}{detail}",
            code="PAYMENT_DECLINED",
        )
        self.channel = channel
        self.amount = amount
        self.reason = reason


# === Errores de Estado ===


class StateConflictError(DomainError):
    """El estado actual no permite la transición solicitada."""

    def __init__(self, current_status: str, expected_status: str | list[str], operation: str):
        expected = expected_status if isinstance(expected_status, str) else ", ".join(expected_status)
        super().__init__(
            message=f"Cannot {operation}: current status '{current_status}', expected '{expected}'",
            code="STATE_CONFLICT",
        )
        self.current_status = current_status
        self.expected_status = expected_status
        self.operation = operation


class OptimisticLockError(DomainError):
    """Conflicto de concurrencia al escribir en el store."""

    def __init__(self, entity: str, identifier: object, expected: object, actual: object):
        super().__init__(
            message=f"Concurrent modification of {entity} {identifier}: "
            f"expected {expected}, found {actual}",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.entity = entity
        self.identifier = identifier
        self.expected = expected
        self.actual = actual
