"""Value Object ReservationCode - identificador opaco de reservación."""

import uuid
from dataclasses import dataclass


@dataclass(frozen=True)
class ReservationCode:
    """
    Value Object inmutable con el id de una reservación.

    Formato: prefijo del tipo + 8 caracteres hexadecimales (ej: ONL_1a2b3c4d,
    WLK_9f8e7d6c).
    """

    value: str

    SUFFIX_LENGTH = 8

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("reservation id cannot be empty")

        if len(self.value) > 50:
            raise ValueError(f"reservation id exceeds 50 characters: {len(self.value)}")

    def __str__(self) -> str:
        return self.value

    @property
    def prefix(self) -> str:
        return self.value.split("_", 1)[0]

    @classmethod
    def generate(cls, prefix: str) -> "ReservationCode":
        """Genera un id nuevo con el prefijo del tipo de reservación."""
        return cls(value=f"{prefix}_{uuid.uuid4().hex[: cls.SUFFIX_LENGTH]}")
