"""Implementación SQL del repositorio de reservaciones."""

from datetime import date
from typing import Iterable

from sqlalchemy import insert, select, update

from hotel_booking.application.interfaces.reservation_repo import ReservationRepo
from hotel_booking.domain.entities.payment import PaymentMethod
from hotel_booking.domain.entities.reservation import (
    ACTIVE_STATUSES,
    OnlineDetails,
    Reservation,
    ReservationKind,
    ReservationStatus,
    WalkInDetails,
)
from hotel_booking.domain.errors import OptimisticLockError, ReservationNotFoundError
from hotel_booking.infrastructure.db.engine import SessionScope
from hotel_booking.infrastructure.db.tables import reservations


class ReservationRepoSQL(ReservationRepo):
    def __init__(self, sessions: SessionScope) -> None:
        self._sessions = sessions

    async def get_by_id(self, reservation_id: str) -> Reservation | None:
        stmt = select(reservations).where(reservations.c.id == reservation_id).limit(1)
        async with self._sessions.transaction() as session:
            result = await session.execute(stmt)
            row = result.mappings().first()
        return self._row_to_reservation(row) if row else None

    async def find_by_room_and_date_range(
        self,
        room_id: int,
        check_in: date,
        check_out: date,
        statuses: Iterable[ReservationStatus] = ACTIVE_STATUSES,
    ) -> list[Reservation]:
        # Intervalos semiabiertos: salida == entrada no se considera solapamiento
        stmt = select(reservations).where(
            reservations.c.room_id == room_id,
            reservations.c.status.in_([status.value for status in statuses]),
            reservations.c.check_in_date < check_out,
            reservations.c.check_out_date > check_in,
        )
        async with self._sessions.transaction() as session:
            result = await session.execute(stmt)
            rows = result.mappings().all()
        return [self._row_to_reservation(row) for row in rows]

    async def save(self, reservation: Reservation) -> Reservation:
        values = {"id": reservation.id, **self._values(reservation)}
        async with self._sessions.transaction() as session:
            await session.execute(insert(reservations).values(values))
        return reservation

    async def update(
        self,
        reservation: Reservation,
        expected_lock_version: int | None = None,
    ) -> None:
        where_clause = [reservations.c.id == reservation.id]
        if expected_lock_version is not None:
            where_clause.append(reservations.c.lock_version == expected_lock_version)
        stmt = update(reservations).where(*where_clause).values(self._values(reservation))
        async with self._sessions.transaction() as session:
            result = await session.execute(stmt)
            if result.rowcount == 0:
                current = await self.get_by_id(reservation.id)
                if current is None:
                    raise ReservationNotFoundError(reservation.id)
                raise OptimisticLockError(
                    "reservation", reservation.id, expected_lock_version, current.lock_version
                )

    def _values(self, reservation: Reservation) -> dict:
        return {
            "kind": reservation.kind.value,
            "guest_id": reservation.guest_id,
            "room_id": reservation.room_id,
            "check_in_date": reservation.check_in,
            "check_out_date": reservation.check_out,
            "total_amount": reservation.total_amount,
            "currency_code": reservation.currency_code,
            "pricing_strategy": reservation.pricing_strategy,
            "status": reservation.status.value,
            "payment_method": reservation.payment_method.value,
            "payment_transaction_id": reservation.payment_transaction_id,
            "email_sent": reservation.email_sent,
            "receipt_printed": reservation.receipt_printed,
            "lock_version": reservation.lock_version,
            "created_at": reservation.created_at,
            "updated_at": reservation.updated_at,
        }

    def _row_to_reservation(self, row) -> Reservation:
        kind = ReservationKind(row["kind"])
        if kind == ReservationKind.ONLINE:
            details = OnlineDetails(email_sent=bool(row["email_sent"]))
        else:
            details = WalkInDetails(receipt_printed=bool(row["receipt_printed"]))
        return Reservation(
            id=row["id"],
            kind=kind,
            guest_id=row["guest_id"],
            room_id=row["room_id"],
            check_in=row["check_in_date"],
            check_out=row["check_out_date"],
            total_amount=row["total_amount"],
            currency_code=row["currency_code"],
            pricing_strategy=row["pricing_strategy"],
            status=ReservationStatus(row["status"]),
            payment_method=PaymentMethod(row["payment_method"]),
            payment_transaction_id=row["payment_transaction_id"],
            details=details,
            lock_version=row["lock_version"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
