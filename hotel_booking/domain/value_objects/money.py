"""Value Object Money - representa un valor monetario con su moneda."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from hotel_booking.domain.errors import InvalidMoneyError

CENTS = Decimal("0.01")


def quantize(amount: Decimal) -> Decimal:
    """Redondea a 2 decimales (ROUND_HALF_UP)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """
    Value Object inmutable que representa un monto monetario.

    Attributes:
        amount: Monto decimal (2 decimales).
        currency_code: Código ISO 4217 de la moneda (ej: USD, LKR, EUR).
    """

    amount: Decimal
    currency_code: str = "USD"

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation as exc:
                raise InvalidMoneyError(f"amount is not a number: {self.amount!r}") from exc
        object.__setattr__(self, "amount", quantize(self.amount))

        if len(self.currency_code) != 3:
            raise InvalidMoneyError(
                f"currency_code must be 3 characters: {self.currency_code}",
                field="currency_code",
            )

        if self.amount < 0:
            raise InvalidMoneyError(f"amount cannot be negative: {self.amount}")

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            raise TypeError(f"No se puede sumar Money con {type(other)}")
        if self.currency_code != other.currency_code:
            raise InvalidMoneyError(
                f"cannot add different currencies: {self.currency_code} vs {other.currency_code}"
            )
        return Money(amount=self.amount + other.amount, currency_code=self.currency_code)

    def is_zero(self) -> bool:
        return self.amount == Decimal("0")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_code}"

    @classmethod
    def zero(cls, currency_code: str = "USD") -> "Money":
        """Crea un Money con valor cero."""
        return cls(amount=Decimal("0"), currency_code=currency_code)
