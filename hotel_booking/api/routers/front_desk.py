from fastapi import APIRouter, Body, Depends, status

from hotel_booking.api.dependencies import get_orchestrator
from hotel_booking.api.routers._results import to_response
from hotel_booking.api.schemas.booking import BookingRequest, CheckOutRequest, WorkflowResponse
from hotel_booking.application.booking_orchestrator import BookingOrchestrator

router = APIRouter(prefix="/front-desk")


@router.post("/walk-in", response_model=WorkflowResponse, status_code=status.HTTP_201_CREATED)
async def create_walk_in_reservation(
    payload: BookingRequest,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    result = await orchestrator.make_walk_in_reservation(
        guest=payload.guest.to_dto(),
        room_id=payload.room_id,
        check_in=payload.check_in.isoformat(),
        check_out=payload.check_out.isoformat(),
    )
    return to_response(result)


@router.post("/reservations/{reservation_id}/check-in", response_model=WorkflowResponse)
async def check_in(
    reservation_id: str,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    return to_response(await orchestrator.check_in(reservation_id))


@router.post("/reservations/{reservation_id}/check-out", response_model=WorkflowResponse)
async def check_out(
    reservation_id: str,
    payload: CheckOutRequest | None = Body(default=None),
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    extras = payload.additional_charges if payload else None
    return to_response(await orchestrator.check_out(reservation_id, extras))
