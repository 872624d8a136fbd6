import logging
import random
import uuid
from decimal import Decimal

from hotel_booking.application.interfaces.payment_channel import PaymentChannel
from hotel_booking.domain.entities.payment import (
    PaymentMethod,
    PaymentTransaction,
    TransactionKind,
)

logger = logging.getLogger(__name__)


class ExternalPosTerminal:
    """Simulated card terminal at the front desk."""

    def __init__(self, decline_rate: float = 0.01, rng: random.Random | None = None) -> None:
        self.decline_rate = decline_rate
        self._rng = rng or random.Random()

    def authorize(self, amount: Decimal) -> bool:
        logger.debug("POS terminal authorizing amount", extra={"amount": str(amount)})
        return self._rng.random() >= self.decline_rate

    def reverse(self, transaction_id: str) -> bool:
        logger.debug("POS terminal reversing transaction", extra={"transaction_id": transaction_id})
        return True


class PosTerminalChannel(PaymentChannel):
    name = PaymentMethod.POS.value
    label = "POS Terminal"
    transaction_prefix = "POS_"

    def __init__(self, terminal: ExternalPosTerminal | None = None) -> None:
        super().__init__()
        self._terminal = terminal or ExternalPosTerminal()

    async def _authorize(self, amount: Decimal) -> PaymentTransaction:
        logger.info("Processing POS payment", extra={"amount": str(amount)})
        if not self._terminal.authorize(amount):
            return self._declined(amount, "declined at POS terminal", TransactionKind.CHARGE)
        transaction = PaymentTransaction(
            amount=amount,
            channel=self.name,
            success=True,
            transaction_id=f"{self.transaction_prefix}{uuid.uuid4().hex[:12].upper()}",
        )
        logger.info(
            "POS payment authorized",
            extra={"transaction_id": transaction.transaction_id, "amount": str(amount)},
        )
        return transaction

    async def _refund(self, transaction_id: str, amount: Decimal) -> PaymentTransaction:
        if not self._terminal.reverse(transaction_id):
            return self._declined(amount, "POS reversal rejected", TransactionKind.REFUND)
        return PaymentTransaction(
            amount=amount,
            channel=self.name,
            success=True,
            transaction_id=transaction_id,
            kind=TransactionKind.REFUND,
        )
