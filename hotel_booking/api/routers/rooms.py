from datetime import date

from fastapi import APIRouter, Depends, Query

from hotel_booking.api.dependencies import get_orchestrator
from hotel_booking.api.routers._results import to_response
from hotel_booking.api.schemas.booking import WorkflowResponse
from hotel_booking.application.booking_orchestrator import BookingOrchestrator

router = APIRouter(prefix="/rooms")


@router.get("/available", response_model=WorkflowResponse)
async def search_available_rooms(
    check_in: date = Query(...),
    check_out: date = Query(...),
    room_type: str | None = Query(default=None),
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    result = await orchestrator.search_available_rooms(
        check_in.isoformat(), check_out.isoformat(), room_type
    )
    return to_response(result)


@router.get("/{room_id}", response_model=WorkflowResponse)
async def get_room(
    room_id: int,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    return to_response(await orchestrator.get_room(room_id))
