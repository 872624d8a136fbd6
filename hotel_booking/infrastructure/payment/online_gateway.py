import logging
import random
import time
import uuid
from decimal import Decimal
from urllib.parse import urlencode

from pybreaker import CircuitBreaker, CircuitBreakerError

from hotel_booking.application.interfaces.payment_channel import PaymentChannel
from hotel_booking.domain.entities.payment import (
    PaymentMethod,
    PaymentTransaction,
    TransactionKind,
)
from hotel_booking.infrastructure.circuit_breaker import build_gateway_breaker

logger = logging.getLogger(__name__)


class SecureBankPortal:
    """
    Simulated remote bank portal.

    The guest would be redirected to the generated link; the callback that
    reports the outcome is simulated with a configurable decline rate.
    """

    def __init__(
        self,
        base_url: str = "https://secure-bank.com/pay",
        decline_rate: float = 0.02,
        rng: random.Random | None = None,
    ) -> None:
        self.base_url = base_url
        self.decline_rate = decline_rate
        self._rng = rng or random.Random()

    def generate_payment_link(self, amount: Decimal) -> str:
        query = urlencode({"amount": f"{amount:.2f}", "ref": time.time_ns()})
        return f"{self.base_url}?{query}"

    def process_payment_callback(self, payment_link: str) -> bool:
        logger.debug("Bank portal processing callback", extra={"payment_link": payment_link})
        return self._rng.random() >= self.decline_rate

    def refund(self, transaction_id: str, amount: Decimal) -> bool:
        logger.debug(
            "Bank portal refunding transaction",
            extra={"transaction_id": transaction_id, "amount": str(amount)},
        )
        return True


class OnlineGatewayChannel(PaymentChannel):
    """Remote gateway channel; portal calls go through a circuit breaker."""

    name = PaymentMethod.ONLINE_GATEWAY.value
    label = "Online Gateway"
    transaction_prefix = "GW_"

    def __init__(
        self,
        portal: SecureBankPortal | None = None,
        breaker: CircuitBreaker | None = None,
    ) -> None:
        super().__init__()
        self._portal = portal or SecureBankPortal()
        self._breaker = breaker or build_gateway_breaker()
        self.last_payment_link: str | None = None

    async def _authorize(self, amount: Decimal) -> PaymentTransaction:
        logger.info("Processing online gateway payment", extra={"amount": str(amount)})
        try:
            payment_link = self._breaker.call(self._portal.generate_payment_link, amount)
            self.last_payment_link = payment_link
            approved = self._breaker.call(self._portal.process_payment_callback, payment_link)
        except CircuitBreakerError as e:
            logger.error(
                "Payment gateway circuit breaker is open - service unavailable",
                extra={"circuit_state": str(e)},
            )
            return self._declined(amount, "payment gateway unavailable", TransactionKind.CHARGE)

        if not approved:
            return self._declined(amount, "declined by bank portal", TransactionKind.CHARGE)

        transaction = PaymentTransaction(
            amount=amount,
            channel=self.name,
            success=True,
            transaction_id=f"{self.transaction_prefix}{uuid.uuid4().hex[:12].upper()}",
            payment_link=payment_link,
        )
        logger.info(
            "Online payment successful",
            extra={"transaction_id": transaction.transaction_id, "amount": str(amount)},
        )
        return transaction

    async def _refund(self, transaction_id: str, amount: Decimal) -> PaymentTransaction:
        try:
            refunded = self._breaker.call(self._portal.refund, transaction_id, amount)
        except CircuitBreakerError:
            return self._declined(amount, "payment gateway unavailable", TransactionKind.REFUND)
        if not refunded:
            return self._declined(amount, "refund rejected by bank portal", TransactionKind.REFUND)
        return PaymentTransaction(
            amount=amount,
            channel=self.name,
            success=True,
            transaction_id=transaction_id,
            kind=TransactionKind.REFUND,
        )
