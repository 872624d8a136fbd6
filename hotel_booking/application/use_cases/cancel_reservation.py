import logging
from dataclasses import dataclass, field
from decimal import Decimal

from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.guest_repo import GuestRepo
from hotel_booking.application.interfaces.notifier import Notifier
from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.locks import KeyedLock
from hotel_booking.application.payment_service import PaymentService
from hotel_booking.application.room_availability import RoomAvailability
from hotel_booking.domain.entities.reservation import Reservation
from hotel_booking.domain.entities.room import RoomStatus
from hotel_booking.domain.errors import (
    OptimisticLockError,
    ReservationNotFoundError,
    StateConflictError,
)


@dataclass
class CancellationResult:
    reservation: Reservation
    already_cancelled: bool = False
    refunded_amount: Decimal = Decimal("0.00")
    warnings: list[str] = field(default_factory=list)


class CancelReservationUseCase:
    """
    Cancela una reservación activa.

    Cancelar algo ya cancelado no hace nada (ni segundo reembolso). El
    reembolso es por el total y, junto con el aviso al huésped, es de mejor
    esfuerzo: un fallo queda como advertencia.
    """

    def __init__(
        self,
        reservation_repo: ReservationRepo,
        guest_repo: GuestRepo,
        room_availability: RoomAvailability,
        payment_service: PaymentService,
        notifier: Notifier,
        transaction_manager: TransactionManager,
        reservation_locks: KeyedLock,
        clock: Clock,
    ) -> None:
        self._reservation_repo = reservation_repo
        self._guest_repo = guest_repo
        self._room_availability = room_availability
        self._payment_service = payment_service
        self._notifier = notifier
        self._transaction_manager = transaction_manager
        self._reservation_locks = reservation_locks
        self._clock = clock
        self._logger = logging.getLogger(__name__)

    async def execute(self, reservation_id: str) -> CancellationResult:
        async with self._reservation_locks.hold(reservation_id):
            async with self._transaction_manager.start():
                reservation = await self._reservation_repo.get_by_id(reservation_id)
                if reservation is None:
                    raise ReservationNotFoundError(reservation_id)
                if reservation.is_cancelled:
                    self._logger.info(
                        "Reservation already cancelled", extra={"reservation_id": reservation_id}
                    )
                    return CancellationResult(reservation=reservation, already_cancelled=True)

                expected_lock_version = reservation.lock_version
                reservation.cancel(at=self._clock.now())
                try:
                    await self._reservation_repo.update(
                        reservation, expected_lock_version=expected_lock_version
                    )
                except OptimisticLockError as exc:
                    raise StateConflictError(
                        "MODIFIED", "CONFIRMED", f"cancel reservation {reservation_id}"
                    ) from exc
                await self._room_availability.set_status(reservation.room_id, RoomStatus.AVAILABLE)

            self._logger.info(
                "Reservation cancelled",
                extra={"reservation_id": reservation_id, "room_id": reservation.room_id},
            )
            result = CancellationResult(reservation=reservation)
            await self._refund(result)
            await self._notify(result)
            return result

    async def _refund(self, result: CancellationResult) -> None:
        reservation = result.reservation
        if not reservation.payment_transaction_id:
            result.warnings.append("no payment recorded, nothing to refund")
            return
        try:
            refunded = await self._payment_service.refund(
                reservation.payment_transaction_id, reservation.total_amount
            )
        except Exception:
            self._logger.exception(
                "Refund failed",
                extra={
                    "reservation_id": reservation.id,
                    "transaction_id": reservation.payment_transaction_id,
                },
            )
            refunded = False
        if refunded:
            result.refunded_amount = reservation.total_amount
        else:
            result.warnings.append(f"refund of {reservation.total_amount} failed")

    async def _notify(self, result: CancellationResult) -> None:
        reservation = result.reservation
        try:
            guest = await self._guest_repo.get_by_id(reservation.guest_id)
            if guest is None or not guest.has_email:
                return
            if not await self._notifier.send_cancellation(guest, reservation, result.refunded_amount):
                result.warnings.append("cancellation notice not sent")
        except Exception:
            self._logger.exception(
                "Cancellation notice failed", extra={"reservation_id": reservation.id}
            )
            result.warnings.append("cancellation notice failed")
