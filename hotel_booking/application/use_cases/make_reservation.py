import logging
from collections.abc import Callable

from hotel_booking.application.dtos.booking_dto import BookingRequestDTO, GuestDTO
from hotel_booking.application.interfaces.clock import Clock
from hotel_booking.application.interfaces.guest_repo import GuestRepo
from hotel_booking.application.interfaces.notifier import Notifier
from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.locks import KeyedLock
from hotel_booking.application.payment_service import PaymentService
from hotel_booking.application.room_availability import ReserveOutcome, RoomAvailability
from hotel_booking.domain.entities.guest import Guest
from hotel_booking.domain.entities.reservation import Reservation, ReservationKind
from hotel_booking.domain.entities.room import Room
from hotel_booking.domain.errors import RoomUnavailableError, ValidationError
from hotel_booking.domain.pricing import PricingStrategy
from hotel_booking.domain.value_objects.money import quantize
from hotel_booking.domain.value_objects.stay_period import StayPeriod


class MakeReservationUseCase:
    """
    Reserva en línea o en recepción, según `kind`.

    Orden: validar -> reservar la habitación -> crear y confirmar -> cobrar.
    Si el cobro falla la reservación queda CANCELLED y la habitación vuelve a
    AVAILABLE antes de propagar el error.
    """

    def __init__(
        self,
        room_availability: RoomAvailability,
        room_repo: RoomRepo,
        guest_repo: GuestRepo,
        reservation_repo: ReservationRepo,
        payment_service: PaymentService,
        notifier: Notifier,
        transaction_manager: TransactionManager,
        reservation_locks: KeyedLock,
        pricing: Callable[[], PricingStrategy],
        clock: Clock,
        currency_code: str = "USD",
    ) -> None:
        self._room_availability = room_availability
        self._room_repo = room_repo
        self._guest_repo = guest_repo
        self._reservation_repo = reservation_repo
        self._payment_service = payment_service
        self._notifier = notifier
        self._transaction_manager = transaction_manager
        self._reservation_locks = reservation_locks
        self._pricing = pricing
        self._clock = clock
        self._currency_code = currency_code
        self._logger = logging.getLogger(__name__)

    async def execute(self, request: BookingRequestDTO) -> tuple[Reservation, list[str]]:
        try:
            kind = ReservationKind(request.kind)
        except ValueError as exc:
            raise ValidationError("kind", f"unknown reservation kind '{request.kind}'") from exc
        guest_input = request.guest.normalized()
        if request.room_id is None or request.room_id <= 0:
            raise ValidationError("room_id", "must be a positive integer")
        stay = StayPeriod.from_strings(request.check_in, request.check_out)

        room = await self._room_repo.get_by_id(request.room_id)
        if room is None:
            raise RoomUnavailableError(request.room_id, "room does not exist")
        if not room.is_available:
            raise RoomUnavailableError(request.room_id, f"room is {room.status.value}")

        outcome = await self._room_availability.reserve(room.id, stay.check_in, stay.check_out)
        if outcome == ReserveOutcome.NOT_FOUND:
            raise RoomUnavailableError(room.id, "room does not exist")
        if outcome == ReserveOutcome.CONFLICT:
            raise RoomUnavailableError(room.id, f"already booked for {stay}")

        try:
            guest, reservation = await self._create_confirmed(kind, guest_input, room, stay)
        except Exception:
            await self._release_room(room.id, reason="reservation could not be created")
            raise

        async with self._reservation_locks.hold(reservation.id):
            return await self._charge_and_finish(reservation, guest, room)

    async def _create_confirmed(
        self,
        kind: ReservationKind,
        guest_input: GuestDTO,
        room: Room,
        stay: StayPeriod,
    ) -> tuple[Guest, Reservation]:
        now = self._clock.now()
        async with self._transaction_manager.start():
            guest = await self._resolve_guest(guest_input)
            strategy = self._pricing()
            total_amount = quantize(strategy.price(stay.nights, room.base_rate))
            reservation = Reservation.create(
                kind=kind,
                guest_id=guest.id,
                room_id=room.id,
                stay=stay,
                total_amount=total_amount,
                currency_code=self._currency_code,
                pricing_strategy=strategy.name,
                at=now,
            )
            reservation.confirm(at=now)
            await self._reservation_repo.save(reservation)

        self._logger.info(
            "Reservation created",
            extra={
                "reservation_id": reservation.id,
                "kind": kind.value,
                "room_id": room.id,
                "guest_id": guest.id,
                "total_amount": str(total_amount),
                "pricing_strategy": strategy.name,
            },
        )
        return guest, reservation

    async def _resolve_guest(self, guest_input: GuestDTO) -> Guest:
        existing = await self._guest_repo.find_by_national_id(guest_input.national_id)
        if existing is None:
            return await self._guest_repo.save(guest_input.to_guest())
        if existing.update_contact(
            phone=guest_input.phone, email=guest_input.email, address=guest_input.address
        ):
            await self._guest_repo.update_contact(existing)
        return existing

    async def _charge_and_finish(
        self, reservation: Reservation, guest: Guest, room: Room
    ) -> tuple[Reservation, list[str]]:
        try:
            transaction = await self._payment_service.charge(
                reservation.total_amount, reservation.payment_method
            )
        except Exception:
            await self._roll_back(reservation)
            raise

        reservation.record_payment(transaction.transaction_id)
        warnings = await self._run_side_effect(reservation, guest, room)

        try:
            async with self._transaction_manager.start():
                await self._reservation_repo.update(
                    reservation, expected_lock_version=reservation.lock_version
                )
        except Exception:
            self._logger.exception(
                "Could not record payment, refunding",
                extra={
                    "reservation_id": reservation.id,
                    "transaction_id": transaction.transaction_id,
                },
            )
            try:
                await self._payment_service.refund(
                    transaction.transaction_id, reservation.total_amount
                )
            except Exception:
                self._logger.exception(
                    "Refund failed while rolling back booking",
                    extra={
                        "reservation_id": reservation.id,
                        "transaction_id": transaction.transaction_id,
                    },
                )
            finally:
                await self._roll_back(reservation)
            raise

        self._logger.info(
            "Reservation booked",
            extra={
                "reservation_id": reservation.id,
                "room_id": reservation.room_id,
                "transaction_id": transaction.transaction_id,
            },
        )
        return reservation, warnings

    async def _run_side_effect(self, reservation: Reservation, guest: Guest, room: Room) -> list[str]:
        """Correo (en línea) o recibo (recepción); un fallo sólo deja una advertencia."""
        try:
            if reservation.kind == ReservationKind.ONLINE:
                if await self._notifier.send_confirmation(guest, reservation):
                    reservation.mark_email_sent()
                    return []
                return ["confirmation email not sent"]
            if await self._notifier.print_receipt(guest, reservation, room):
                reservation.mark_receipt_printed()
                return []
            return ["receipt not printed"]
        except Exception:
            self._logger.exception(
                "Notification failed after booking",
                extra={"reservation_id": reservation.id, "kind": reservation.kind.value},
            )
            if reservation.kind == ReservationKind.ONLINE:
                return ["confirmation email failed"]
            return ["receipt printing failed"]

    async def _roll_back(self, reservation: Reservation) -> None:
        self._logger.warning(
            "Payment failed, rolling back reservation",
            extra={"reservation_id": reservation.id, "room_id": reservation.room_id},
        )
        try:
            async with self._transaction_manager.start():
                stored = await self._reservation_repo.get_by_id(reservation.id)
                if stored is not None and stored.is_active:
                    expected = stored.lock_version
                    stored.cancel(at=self._clock.now())
                    await self._reservation_repo.update(stored, expected_lock_version=expected)
                    reservation.status = stored.status
                    reservation.lock_version = stored.lock_version
        except Exception:
            self._logger.exception(
                "Could not cancel reservation during rollback",
                extra={"reservation_id": reservation.id},
            )
        await self._release_room(reservation.room_id, reason="payment failed")

    async def _release_room(self, room_id: int, reason: str) -> None:
        try:
            await self._room_availability.release(room_id)
        except Exception:
            self._logger.exception(
                "Could not release room during rollback",
                extra={"room_id": room_id, "reason": reason},
            )
