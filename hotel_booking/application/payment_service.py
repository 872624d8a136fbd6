import logging
import threading
from decimal import Decimal

from hotel_booking.application.interfaces.payment_channel import PaymentChannel
from hotel_booking.domain.entities.payment import PaymentMethod, PaymentTransaction
from hotel_booking.domain.errors import DomainError, PaymentDeclinedError, ValidationError

logger = logging.getLogger(__name__)

AUTO = "AUTO"


class PaymentService:
    """
    Holds the payment channels and the administrator's channel choice.

    With the AUTO selection each reservation is charged through the channel
    that matches its payment method (online gateway or POS terminal); pinning
    a channel routes every charge through it. Swaps are atomic: a caller sees
    either the old or the new channel.
    """

    def __init__(self, channels: dict[str, PaymentChannel], selected: str = AUTO) -> None:
        if not channels:
            raise ValueError("At least one payment channel is required")
        self._channels = dict(channels)
        self._lock = threading.Lock()
        self._selected = AUTO
        self.set_channel(selected)

    @property
    def available_channels(self) -> list[str]:
        return sorted(self._channels)

    def set_channel(self, channel: str | PaymentChannel) -> str:
        """Pin a channel by name or instance; AUTO restores per-kind routing."""
        if isinstance(channel, PaymentChannel):
            with self._lock:
                self._channels = {**self._channels, channel.name: channel}
                self._selected = channel.name
            logger.info("Payment channel switched", extra={"channel": channel.name})
            return channel.name

        name = (channel or "").strip().upper()
        if name != AUTO and name not in self._channels:
            raise ValidationError("channel", f"unknown payment channel '{channel}'")
        with self._lock:
            self._selected = name
        logger.info("Payment channel switched", extra={"channel": name})
        return name

    @property
    def selected(self) -> str:
        return self._selected

    def current_channel(self, method: PaymentMethod | None = None) -> PaymentChannel:
        with self._lock:
            selected = self._selected
            channels = self._channels
        if selected != AUTO:
            return channels[selected]
        if method is not None and method.value in channels:
            return channels[method.value]
        return channels[sorted(channels)[0]]

    def describe(self) -> str:
        if self._selected == AUTO:
            parts = [channel.describe() for _, channel in sorted(self._channels.items())]
            return "Payment channel: AUTO (" + "; ".join(parts) + ")"
        return "Payment channel: " + self.current_channel().describe()

    async def charge(self, amount: Decimal, method: PaymentMethod | None = None) -> PaymentTransaction:
        """
        Charge `amount`; any refusal or channel exception becomes PaymentDeclinedError.

        Invalid amounts surface as ValidationError before the channel is called.
        """
        channel = self.current_channel(method)
        logger.info(
            "Processing payment",
            extra={"amount": str(amount), "channel": channel.name},
        )
        try:
            transaction = await channel.charge_transaction(amount)
        except ValidationError:
            raise
        except DomainError as exc:
            raise PaymentDeclinedError(channel.name, amount, exc.message) from exc
        except Exception as exc:
            logger.exception(
                "Unexpected error during payment processing",
                extra={"amount": str(amount), "channel": channel.name},
            )
            raise PaymentDeclinedError(channel.name, amount, str(exc) or type(exc).__name__) from exc

        if not transaction.success:
            raise PaymentDeclinedError(channel.name, amount, transaction.reason)

        logger.info(
            "Payment successful",
            extra={"channel": channel.name, "transaction_id": transaction.transaction_id},
        )
        return transaction

    async def refund(self, transaction_id: str | None, amount: Decimal) -> bool:
        """Refund through the channel that issued `transaction_id`."""
        if not transaction_id:
            logger.warning("No transaction recorded, refund skipped", extra={"amount": str(amount)})
            return False
        channel = self._issuer_of(transaction_id)
        refunded = await channel.refund(transaction_id, amount)
        log = logger.info if refunded else logger.warning
        log(
            "Refund processed" if refunded else "Refund declined",
            extra={"transaction_id": transaction_id, "amount": str(amount), "channel": channel.name},
        )
        return refunded

    def _issuer_of(self, transaction_id: str) -> PaymentChannel:
        with self._lock:
            channels = list(self._channels.values())
        for channel in channels:
            if channel.issued(transaction_id):
                return channel
        return self.current_channel()
