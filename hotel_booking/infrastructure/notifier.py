import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal

from hotel_booking.application.interfaces.notifier import Notifier
from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.reservation import Reservation
from hotel_booking.domain.entities.room import Room

logger = logging.getLogger(__name__)

RULE = "=" * 32


@dataclass
class Notification:
    channel: str
    recipient: str
    subject: str
    body: str
    reservation_id: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class LoggingNotifier(Notifier):
    """
    Stand-in for the mail server and the front-desk receipt printer.

    Messages are rendered, logged and kept in `sent` so callers can inspect
    what would have been delivered.
    """

    def __init__(self, hotel_name: str = "OCEAN VIEW RESORT") -> None:
        self.hotel_name = hotel_name
        self.sent: list[Notification] = []

    async def send_confirmation(self, guest: Guest, reservation: Reservation) -> bool:
        if not guest.has_email:
            logger.warning(
                "No email address for guest, confirmation not sent",
                extra={"guest_id": guest.id, "reservation_id": reservation.id},
            )
            return False
        body = (
            f"Dear {guest.name},\n"
            f"Your reservation {reservation.id} is confirmed.\n"
            f"Check-In: {reservation.check_in.isoformat()}\n"
            f"Check-Out: {reservation.check_out.isoformat()}\n"
            f"Nights: {reservation.nights}\n"
            f"Total Amount: {reservation.total_amount:.2f} {reservation.currency_code}\n"
        )
        self._deliver("EMAIL", guest.email, f"{self.hotel_name} reservation confirmation", body, reservation)
        return True

    async def print_receipt(self, guest: Guest, reservation: Reservation, room: Room) -> bool:
        lines = [
            RULE,
            f"   {self.hotel_name}",
            "   Reservation Receipt",
            RULE,
            f"Reservation ID: {reservation.id}",
            f"Guest: {guest.name}",
            f"NIC: {guest.national_id}",
            f"Phone: {guest.phone}",
            f"Room: {room.number} ({room.room_type.value})",
            f"Check-In: {reservation.check_in.isoformat()}",
            f"Check-Out: {reservation.check_out.isoformat()}",
            f"Nights: {reservation.nights}",
            f"Rate per Night: {room.base_rate:.2f}",
            f"Total Amount: {reservation.total_amount:.2f}",
            RULE,
            "Thank you for choosing us!",
            RULE,
        ]
        self._deliver("PRINTER", "front-desk", "Reservation Receipt", "\n".join(lines), reservation)
        return True

    async def send_cancellation(
        self, guest: Guest, reservation: Reservation, refund_amount: Decimal
    ) -> bool:
        if not guest.has_email:
            logger.warning(
                "No email address for guest, cancellation notice not sent",
                extra={"guest_id": guest.id, "reservation_id": reservation.id},
            )
            return False
        body = (
            f"Dear {guest.name},\n"
            f"Your reservation {reservation.id} has been cancelled.\n"
            f"Refund amount: {refund_amount:.2f} {reservation.currency_code}\n"
        )
        self._deliver("EMAIL", guest.email, f"{self.hotel_name} reservation cancelled", body, reservation)
        return True

    async def print_checkout_bill(
        self,
        guest: Guest,
        reservation: Reservation,
        room: Room,
        additional_charges: Decimal,
    ) -> bool:
        total_bill = reservation.total_amount + additional_charges
        lines = [
            RULE,
            f"   {self.hotel_name}",
            "   Final Invoice",
            RULE,
            f"Reservation ID: {reservation.id}",
            f"Guest: {guest.name}",
            f"Room: {room.number}",
            f"Check-In: {reservation.check_in.isoformat()}",
            f"Check-Out: {reservation.check_out.isoformat()}",
            f"Nights: {reservation.nights}",
            "-" * 32,
            f"Room Charges: {reservation.total_amount:.2f}",
        ]
        if additional_charges > 0:
            lines.append(f"Additional Charges: {additional_charges:.2f}")
        lines += [
            RULE,
            f"Total Bill: {total_bill:.2f}",
            f"Payment Method: {reservation.payment_method.value}",
            RULE,
            "We hope you enjoyed your stay!",
            RULE,
        ]
        self._deliver("PRINTER", "front-desk", "Final Invoice", "\n".join(lines), reservation)
        return True

    def _deliver(
        self, channel: str, recipient: str, subject: str, body: str, reservation: Reservation
    ) -> None:
        self.sent.append(
            Notification(
                channel=channel,
                recipient=recipient,
                subject=subject,
                body=body,
                reservation_id=reservation.id,
            )
        )
        logger.info(
            "Notification delivered",
            extra={"channel": channel, "recipient": recipient, "reservation_id": reservation.id},
        )
        logger.debug("%s\n%s", subject, body)
