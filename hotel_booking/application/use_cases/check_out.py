import logging
from decimal import Decimal, InvalidOperation

from hotel_booking.application.dtos.booking_dto import BillView
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.guest_repo import GuestRepo
from hotel_booking.application.interfaces.notifier import Notifier
from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.locks import KeyedLock
from hotel_booking.application.room_availability import RoomAvailability
from hotel_booking.domain.entities.reservation import Reservation, ReservationKind
from hotel_booking.domain.entities.room import Room, RoomStatus
from hotel_booking.domain.errors import (
    InvalidMoneyError,
    OptimisticLockError,
    ReservationNotFoundError,
    RoomNotFoundError,
    StateConflictError,
)
from hotel_booking.domain.value_objects.money import Money, quantize


def _additional_charges(value: Decimal | str | float | None) -> Decimal:
    if value is None:
        return Decimal("0.00")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise InvalidMoneyError(f"not a number: {value!r}", field="additional_charges") from exc
    if not amount.is_finite() or amount < 0:
        raise InvalidMoneyError("must be zero or positive", field="additional_charges")
    return quantize(amount)


class CheckOutUseCase:
    """Salida del huésped: CHECKED_OUT, habitación disponible pero sucia, y factura."""

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        room_repo: RoomRepo,
        guest_repo: GuestRepo,
        room_availability: RoomAvailability,
        notifier: Notifier,
        transaction_manager: TransactionManager,
        reservation_locks: KeyedLock,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._room_repo = room_repo
        self._guest_repo = guest_repo
        self._room_availability = room_availability
        self._notifier = notifier
        self._transaction_manager = transaction_manager
        self._reservation_locks = reservation_locks
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        reservation_id: str,
        additional_charges: Decimal | str | float | None = None,
    ) -> tuple[Reservation, BillView, list[str]]:
        extras = _additional_charges(additional_charges)

        async with self._reservation_locks.hold(reservation_id):
            async with self._transaction_manager.start():
                reservation = await self._reservation_repo.get_by_id(reservation_id)
                if reservation is None:
                    raise ReservationNotFoundError(reservation_id)
                room = await self._room_repo.get_by_id(reservation.room_id)
                if room is None:
                    raise RoomNotFoundError(reservation.room_id)
                expected_lock_version = reservation.lock_version
                reservation.check_out_guest(at=self._clock.now())
                try:
                    await self._reservation_repo.update(
                        reservation, expected_lock_version=expected_lock_version
                    )
                except OptimisticLockError as exc:
                    raise StateConflictError(
                        "MODIFIED", "CHECKED_IN", f"check out reservation {reservation_id}"
                    ) from exc
                await self._room_availability.set_status(room.id, RoomStatus.AVAILABLE)
                room = await self._room_repo.mark_dirty(room.id)

        bill = BillView(
            reservation_id=reservation.id,
            room_number=room.number,
            nights=reservation.nights,
            nightly_rate=quantize(room.base_rate),
            room_charges=reservation.total_amount,
            additional_charges=extras,
            total=(
                Money(reservation.total_amount, reservation.currency_code)
                + Money(extras, reservation.currency_code)
            ).amount,
            currency_code=reservation.currency_code,
        )
        self._logger.info(
            "Guest checked out",
            extra={
                "reservation_id": reservation.id,
                "room_id": room.id,
                "bill_total": str(bill.total),
            },
        )

        warnings: list[str] = []
        if reservation.kind == ReservationKind.WALK_IN:
            warnings += await self._print_bill(reservation, room, extras)
        return reservation, bill, warnings

    async def _print_bill(self, reservation: Reservation, room: Room, extras: Decimal) -> list[str]:
        try:
            guest = await self._guest_repo.get_by_id(reservation.guest_id)
            if guest is None:
                return ["guest record missing, bill not printed"]
            if await self._notifier.print_checkout_bill(guest, reservation, room, extras):
                return []
            return ["checkout bill not printed"]
        except Exception:
            self._logger.exception(
                "Checkout bill printing failed", extra={"reservation_id": reservation.id}
            )
            return ["checkout bill printing failed"]
