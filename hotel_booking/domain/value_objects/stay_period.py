"""Value Object StayPeriod - rango de fechas de una estadía."""

from dataclasses import dataclass
from datetime import date

from hotel_booking.domain.errors import InvalidDateRangeError, ValidationError


@dataclass(frozen=True)
class StayPeriod:
    """
    Value Object inmutable que representa una estadía.

    Usa semántica de intervalo semiabierto [check_in, check_out): la noche del
    check-out no pertenece a la estadía, así que dos estadías consecutivas
    (una termina el día en que empieza la otra) no se superponen.

    Attributes:
        check_in: Fecha de llegada.
        check_out: Fecha de salida (estrictamente posterior a check_in).
    """

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_out <= self.check_in:
            raise InvalidDateRangeError(
                f"check-out date must be after check-in date: "
                f"{self.check_in.isoformat()} >= {self.check_out.isoformat()}"
            )

    @property
    def nights(self) -> int:
        """Número de noches de la estadía."""
        return (self.check_out - self.check_in).days

    def overlaps_with(self, other: "StayPeriod") -> bool:
        """Verifica si comparten al menos una noche."""
        return self.check_in < other.check_out and other.check_in < self.check_out

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"

    @classmethod
    def from_strings(cls, check_in: str, check_out: str) -> "StayPeriod":
        """Factory method para crear desde fechas ISO (YYYY-MM-DD)."""
        return cls(
            check_in=_parse_date("check_in", check_in),
            check_out=_parse_date("check_out", check_out),
        )


def _parse_date(field: str, value: str | date | None) -> date:
    if isinstance(value, date):
        return value
    if not value or not str(value).strip():
        raise ValidationError(field, "date is required")
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise ValidationError(field, f"invalid ISO date '{value}'") from exc
