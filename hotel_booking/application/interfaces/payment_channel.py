import logging
from abc import ABC, abstractmethod
from decimal import Decimal, InvalidOperation

from hotel_booking.domain.entities.payment import PaymentTransaction, TransactionKind
from hotel_booking.domain.errors import InvalidMoneyError

logger = logging.getLogger(__name__)


class PaymentChannel(ABC):
    """
    Contrato de un medio de pago externo (terminal POS, pasarela en línea).

    Las subclases implementan `_authorize` y `_refund`; esta clase valida el
    monto antes de contactar al canal y guarda la última transacción.
    """

    name: str = "PAYMENT_CHANNEL"
    label: str = "Payment Channel"
    transaction_prefix: str = "TX_"

    def __init__(self) -> None:
        self._last_transaction: PaymentTransaction | None = None

    @property
    def last_transaction(self) -> PaymentTransaction | None:
        return self._last_transaction

    async def charge(self, amount: Decimal) -> bool:
        transaction = await self.charge_transaction(amount)
        return transaction.success

    async def charge_transaction(self, amount: Decimal) -> PaymentTransaction:
        """Cobra `amount` y retorna el registro de esta llamada."""
        amount = _require_positive(amount)
        transaction = await self._authorize(amount)
        self._last_transaction = transaction
        return transaction

    async def refund(self, transaction_id: str, amount: Decimal) -> bool:
        amount = _require_positive(amount)
        if not transaction_id:
            raise InvalidMoneyError("transaction id is required for a refund", field="transaction_id")
        transaction = await self._refund(transaction_id, amount)
        self._last_transaction = transaction
        return transaction.success

    def issued(self, transaction_id: str) -> bool:
        return transaction_id.startswith(self.transaction_prefix)

    def describe(self) -> str:
        last = self._last_transaction
        transaction_id = last.transaction_id if last and last.transaction_id else "N/A"
        return f"{self.label} | Transaction ID: {transaction_id}"

    @abstractmethod
    async def _authorize(self, amount: Decimal) -> PaymentTransaction:
        raise NotImplementedError

    @abstractmethod
    async def _refund(self, transaction_id: str, amount: Decimal) -> PaymentTransaction:
        raise NotImplementedError

    def _declined(self, amount: Decimal, reason: str, kind: TransactionKind) -> PaymentTransaction:
        logger.warning(
            "Payment channel declined operation",
            extra={"channel": self.name, "amount": str(amount), "kind": kind.value, "reason": reason},
        )
        return PaymentTransaction.declined(amount=amount, channel=self.name, reason=reason, kind=kind)


def _require_positive(amount: Decimal) -> Decimal:
    try:
        value = Decimal(str(amount))
    except InvalidOperation as exc:
        raise InvalidMoneyError(f"amount is not a number: {amount!r}") from exc
    if not value.is_finite() or value <= 0:
        raise InvalidMoneyError(f"payment amount must be positive: {amount}")
    return value
