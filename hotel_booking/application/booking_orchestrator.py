import logging
import threading
from collections.abc import Awaitable, Callable
from decimal import Decimal

from hotel_booking.application.dtos.booking_dto import (
    BookingRequestDTO,
    GuestDTO,
    ReservationView,
    RoomView,
    WorkflowResult,
)
from hotel_booking.application.interfaces.clock import Clock, SystemClock
from hotel_booking.application.interfaces.guest_repo import GuestRepo
from hotel_booking.application.interfaces.notifier import Notifier
from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.application.interfaces.room_repo import RoomRepo
from hotel_booking.application.interfaces.transaction_manager import TransactionManager
from hotel_booking.application.locks import KeyedLock
from hotel_booking.application.payment_service import PaymentService
from hotel_booking.application.room_availability import RoomAvailability
from hotel_booking.application.use_cases.cancel_reservation import CancelReservationUseCase
from hotel_booking.application.use_cases.check_in import CheckInUseCase
from hotel_booking.application.use_cases.check_out import CheckOutUseCase
from hotel_booking.application.use_cases.get_reservation import GetReservationUseCase
from hotel_booking.application.use_cases.make_reservation import MakeReservationUseCase
from hotel_booking.application.use_cases.search_available_rooms import SearchAvailableRoomsUseCase
from hotel_booking.domain.entities.reservation import ReservationKind
from hotel_booking.domain.errors import DomainError, OptimisticLockError, RoomNotFoundError
from hotel_booking.domain.pricing import (
    PricingStrategy,
    SeasonalRateStrategy,
    StandardRateStrategy,
    build_pricing_strategy,
    validate_multiplier,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "INTERNAL_ERROR"
STATE_CONFLICT = "STATE_CONFLICT"


class BookingOrchestrator:
    """
    Fachada del motor de reservaciones.

    Cada flujo devuelve un WorkflowResult: los errores de dominio se reportan
    con su código y cualquier otra excepción se registra y se reporta como
    INTERNAL_ERROR. La estrategia de precios y el canal de pago son
    configuración que un administrador puede cambiar en caliente.
    """

    def __init__(
        self,
        room_repo: RoomRepo,
        guest_repo: GuestRepo,
        reservation_repo: ReservationRepo,
        payment_service: PaymentService,
        notifier: Notifier,
        transaction_manager: TransactionManager,
        pricing_strategy: PricingStrategy | None = None,
        seasonal_multiplier: Decimal | str | float = Decimal("1.25"),
        clock: Clock | None = None,
        currency_code: str = "USD",
        retry_attempts: int = 2,
        retry_delay: float = 0.01,
    ) -> None:
        self._room_repo = room_repo
        self._payment_service = payment_service
        self._transaction_manager = transaction_manager
        self._clock = clock or SystemClock()

        self._pricing_lock = threading.Lock()
        self._pricing_strategy: PricingStrategy = pricing_strategy or StandardRateStrategy()
        self._seasonal_multiplier = validate_multiplier(seasonal_multiplier)

        self.room_locks = KeyedLock("room")
        self.reservation_locks = KeyedLock("reservation")
        self.room_availability = RoomAvailability(
            room_repo=room_repo,
            reservation_repo=reservation_repo,
            transaction_manager=transaction_manager,
            room_locks=self.room_locks,
            retry_attempts=retry_attempts,
            retry_delay=retry_delay,
        )

        self._make_reservation = MakeReservationUseCase(
            room_availability=self.room_availability,
            room_repo=room_repo,
            guest_repo=guest_repo,
            reservation_repo=reservation_repo,
            payment_service=payment_service,
            notifier=notifier,
            transaction_manager=transaction_manager,
            reservation_locks=self.reservation_locks,
            pricing=lambda: self.current_pricing_strategy,
            clock=self._clock,
            currency_code=currency_code,
        )
        self._check_in = CheckInUseCase(
            reservation_repo=reservation_repo,
            room_availability=self.room_availability,
            transaction_manager=transaction_manager,
            reservation_locks=self.reservation_locks,
            clock=self._clock,
        )
        self._check_out = CheckOutUseCase(
            reservation_repo=reservation_repo,
            room_repo=room_repo,
            guest_repo=guest_repo,
            room_availability=self.room_availability,
            notifier=notifier,
            transaction_manager=transaction_manager,
            reservation_locks=self.reservation_locks,
            clock=self._clock,
        )
        self._cancel = CancelReservationUseCase(
            reservation_repo=reservation_repo,
            guest_repo=guest_repo,
            room_availability=self.room_availability,
            payment_service=payment_service,
            notifier=notifier,
            transaction_manager=transaction_manager,
            reservation_locks=self.reservation_locks,
            clock=self._clock,
        )
        self._get_reservation = GetReservationUseCase(reservation_repo=reservation_repo)
        self._search = SearchAvailableRoomsUseCase(
            room_availability=self.room_availability,
            transaction_manager=transaction_manager,
        )

    # === Reservas ===

    async def make_online_reservation(
        self, guest: GuestDTO, room_id: int, check_in: str, check_out: str
    ) -> WorkflowResult:
        return await self.make_reservation(
            BookingRequestDTO(
                kind=ReservationKind.ONLINE,
                guest=guest,
                room_id=room_id,
                check_in=check_in,
                check_out=check_out,
            )
        )

    async def make_walk_in_reservation(
        self, guest: GuestDTO, room_id: int, check_in: str, check_out: str
    ) -> WorkflowResult:
        return await self.make_reservation(
            BookingRequestDTO(
                kind=ReservationKind.WALK_IN,
                guest=guest,
                room_id=room_id,
                check_in=check_in,
                check_out=check_out,
            )
        )

    async def make_reservation(self, request: BookingRequestDTO) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            reservation, warnings = await self._make_reservation.execute(request)
            return WorkflowResult.ok(
                f"Reservation {reservation.id} confirmed",
                reservation=ReservationView.from_reservation(reservation),
                warnings=warnings,
            )

        return await self._run("make reservation", workflow, room_id=request.room_id)

    async def check_in(self, reservation_id: str) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            reservation = await self._check_in.execute(reservation_id)
            return WorkflowResult.ok(
                f"Reservation {reservation.id} checked in",
                reservation=ReservationView.from_reservation(reservation),
            )

        return await self._run("check in", workflow, reservation_id=reservation_id)

    async def check_out(
        self,
        reservation_id: str,
        additional_charges: Decimal | str | float | None = None,
    ) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            reservation, bill, warnings = await self._check_out.execute(
                reservation_id, additional_charges
            )
            return WorkflowResult.ok(
                f"Reservation {reservation.id} checked out, total bill {bill.total:.2f}",
                reservation=ReservationView.from_reservation(reservation),
                bill=bill,
                warnings=warnings,
            )

        return await self._run("check out", workflow, reservation_id=reservation_id)

    async def cancel(self, reservation_id: str) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            result = await self._cancel.execute(reservation_id)
            if result.already_cancelled:
                message = f"Reservation {reservation_id} was already cancelled"
            else:
                message = f"Reservation {reservation_id} cancelled, refunded {result.refunded_amount:.2f}"
            return WorkflowResult.ok(
                message,
                reservation=ReservationView.from_reservation(result.reservation),
                warnings=result.warnings,
            )

        return await self._run("cancel", workflow, reservation_id=reservation_id)

    async def get_reservation(self, reservation_id: str) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            reservation = await self._get_reservation.execute(reservation_id)
            return WorkflowResult.ok(
                f"Reservation {reservation.id}",
                reservation=ReservationView.from_reservation(reservation),
            )

        return await self._run("get reservation", workflow, reservation_id=reservation_id)

    async def search_available_rooms(
        self, check_in: str, check_out: str, room_type: str | None = None
    ) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            rooms = await self._search.execute(check_in, check_out, room_type)
            return WorkflowResult.ok(
                f"{len(rooms)} room(s) available",
                rooms=[RoomView.from_room(room) for room in rooms],
            )

        return await self._run("search available rooms", workflow)

    # === Administración ===

    @property
    def current_pricing_strategy(self) -> PricingStrategy:
        with self._pricing_lock:
            return self._pricing_strategy

    async def set_pricing_strategy(
        self, name: str, multiplier: Decimal | str | float | None = None
    ) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            if multiplier is not None:
                self._seasonal_multiplier = validate_multiplier(multiplier)
            strategy = build_pricing_strategy(name, self._seasonal_multiplier)
            with self._pricing_lock:
                self._pricing_strategy = strategy
            logger.info("Pricing strategy switched", extra={"strategy": repr(strategy)})
            return WorkflowResult.ok(f"Pricing strategy set to {strategy.name}")

        return await self._run("set pricing strategy", workflow)

    async def set_seasonal_multiplier(self, value: Decimal | str | float) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            multiplier = validate_multiplier(value)
            self._seasonal_multiplier = multiplier
            strategy = self.current_pricing_strategy
            if isinstance(strategy, SeasonalRateStrategy):
                strategy.multiplier = multiplier
            logger.info("Seasonal multiplier updated", extra={"multiplier": str(multiplier)})
            return WorkflowResult.ok(f"Seasonal multiplier set to {multiplier}")

        return await self._run("set seasonal multiplier", workflow)

    async def set_payment_channel(self, name: str) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            selected = self._payment_service.set_channel(name)
            return WorkflowResult.ok(f"Payment channel set to {selected}")

        return await self._run("set payment channel", workflow)

    def payment_channel_status(self) -> dict[str, object]:
        return {
            "selected": self._payment_service.selected,
            "available": self._payment_service.available_channels,
            "description": self._payment_service.describe(),
        }

    async def mark_room_clean(self, room_id: int) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            async with self._transaction_manager.start():
                room = await self._room_repo.mark_clean(room_id)
            logger.info("Room marked clean", extra={"room_id": room_id})
            return WorkflowResult.ok(f"Room {room.number} marked clean", rooms=[RoomView.from_room(room)])

        return await self._run("mark room clean", workflow, room_id=room_id)

    async def set_room_maintenance(self, room_id: int, on: bool) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            room = await self.room_availability.set_maintenance(room_id, on)
            return WorkflowResult.ok(
                f"Room {room.number} is {room.status.value}", rooms=[RoomView.from_room(room)]
            )

        return await self._run("set room maintenance", workflow, room_id=room_id)

    async def get_room(self, room_id: int) -> WorkflowResult:
        async def workflow() -> WorkflowResult:
            room = await self._room_repo.get_by_id(room_id)
            if room is None:
                raise RoomNotFoundError(room_id)
            return WorkflowResult.ok(f"Room {room.number}", rooms=[RoomView.from_room(room)])

        return await self._run("get room", workflow, room_id=room_id)

    # === Infraestructura del flujo ===

    async def _run(
        self,
        operation: str,
        workflow: Callable[[], Awaitable[WorkflowResult]],
        **context,
    ) -> WorkflowResult:
        try:
            return await workflow()
        except OptimisticLockError as e:
            logger.warning(
                "Concurrent modification",
                extra={"operation": operation, "error": e.message, **context},
            )
            return WorkflowResult.failed(e.message, STATE_CONFLICT)
        except DomainError as e:
            logger.info(
                "Workflow rejected",
                extra={"operation": operation, "code": e.code, "error": e.message, **context},
            )
            return WorkflowResult.failed(e.message, e.code)
        except Exception:
            logger.exception("Unexpected error in workflow", extra={"operation": operation, **context})
            return WorkflowResult.failed(f"Unexpected error during {operation}", INTERNAL_ERROR)
