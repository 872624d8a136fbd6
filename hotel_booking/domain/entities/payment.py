"""Entidad PaymentTransaction - registro efímero de una operación de pago."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class TransactionKind(str, Enum):
    CHARGE = "CHARGE"
    REFUND = "REFUND"


class PaymentMethod(str, Enum):
    """Medio de pago asociado a cada tipo de reservación."""

    ONLINE_GATEWAY = "ONLINE_GATEWAY"
    POS = "POS"


@dataclass(frozen=True)
class PaymentTransaction:
    """
    Resultado de una llamada a un canal de pago.

    No se persiste en el core; el canal guarda la última transacción y el
    orquestador copia `transaction_id` a la reservación para poder
    reembolsar.
    """

    amount: Decimal
    channel: str
    success: bool
    transaction_id: str | None = None
    kind: TransactionKind = TransactionKind.CHARGE
    payment_link: str | None = None
    reason: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def declined(
        cls, amount: Decimal, channel: str, reason: str, kind: TransactionKind = TransactionKind.CHARGE
    ) -> "PaymentTransaction":
        return cls(amount=amount, channel=channel, success=False, kind=kind, reason=reason)
