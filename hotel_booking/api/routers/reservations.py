from fastapi import APIRouter, Depends, status

from hotel_booking.api.dependencies import get_orchestrator
from hotel_booking.api.routers._results import to_response
from hotel_booking.api.schemas.booking import BookingRequest, WorkflowResponse
from hotel_booking.application.booking_orchestrator import BookingOrchestrator

router = APIRouter()


@router.post(
    "/reservations/online",
    response_model=WorkflowResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_online_reservation(
    payload: BookingRequest,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    result = await orchestrator.make_online_reservation(
        guest=payload.guest.to_dto(),
        room_id=payload.room_id,
        check_in=payload.check_in.isoformat(),
        check_out=payload.check_out.isoformat(),
    )
    return to_response(result)


@router.get("/reservations/{reservation_id}", response_model=WorkflowResponse)
async def get_reservation(
    reservation_id: str,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    return to_response(await orchestrator.get_reservation(reservation_id))


@router.post("/reservations/{reservation_id}/cancel", response_model=WorkflowResponse)
async def cancel_reservation(
    reservation_id: str,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    return to_response(await orchestrator.cancel(reservation_id))
