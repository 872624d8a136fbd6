"""
Estrategias de precio intercambiables en tiempo de ejecución.

El precio es exacto; el redondeo a centavos ocurre al fijar el total de la
reservación.
"""

import threading
from decimal import Decimal, InvalidOperation
from typing import Protocol

from hotel_booking.domain.errors import ValidationError

STANDARD_RATE = "STANDARD_RATE"
SEASONAL_RATE = "SEASONAL_RATE"


class PricingStrategy(Protocol):
    name: str

    def price(self, nights: int, base_rate: Decimal) -> Decimal: ...


def _billable_nights(nights: int) -> int:
    return max(1, int(nights))


class StandardRateStrategy:
    """Tarifa estándar: noches x tarifa base."""

    name = STANDARD_RATE

    def price(self, nights: int, base_rate: Decimal) -> Decimal:
        return _billable_nights(nights) * Decimal(base_rate)

    def __repr__(self) -> str:
        return "StandardRateStrategy()"


class SeasonalRateStrategy:
    """
    Tarifa de temporada: noches x tarifa base x multiplicador.

    El multiplicador puede cambiarse en caliente; debe ser > 0.
    """

    name = SEASONAL_RATE

    def __init__(self, multiplier: Decimal | str | float) -> None:
        self._lock = threading.Lock()
        self._multiplier = validate_multiplier(multiplier)

    @property
    def multiplier(self) -> Decimal:
        return self._multiplier

    @multiplier.setter
    def multiplier(self, value: Decimal | str | float) -> None:
        validated = validate_multiplier(value)
        with self._lock:
            self._multiplier = validated

    def price(self, nights: int, base_rate: Decimal) -> Decimal:
        multiplier = self._multiplier
        return _billable_nights(nights) * Decimal(base_rate) * multiplier

    def __repr__(self) -> str:
        return f"SeasonalRateStrategy(multiplier={self._multiplier})"


def validate_multiplier(value: Decimal | str | float) -> Decimal:
    try:
        multiplier = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValidationError("multiplier", f"not a number: {value!r}") from exc
    if not multiplier.is_finite() or multiplier <= 0:
        raise ValidationError("multiplier", f"must be greater than 0, got {value}")
    return multiplier


def build_pricing_strategy(name: str, multiplier: Decimal | str | float | None = None) -> PricingStrategy:
    """Construye una estrategia a partir de su nombre de configuración."""
    normalized = (name or "").strip().upper()
    if normalized in (STANDARD_RATE, "STANDARD"):
        return StandardRateStrategy()
    if normalized in (SEASONAL_RATE, "SEASONAL"):
        if multiplier is None:
            raise ValidationError("multiplier", "required for seasonal pricing")
        return SeasonalRateStrategy(multiplier)
    raise ValidationError("strategy", f"unknown pricing strategy '{name}'")
