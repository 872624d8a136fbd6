from fastapi import APIRouter, Depends

from hotel_booking.api.dependencies import get_orchestrator
from hotel_booking.api.routers._results import to_response
from hotel_booking.api.schemas.booking import (
    MaintenanceRequest,
    PaymentChannelRequest,
    PaymentChannelStatusResponse,
    PricingRequest,
    WorkflowResponse,
)
from hotel_booking.application.booking_orchestrator import BookingOrchestrator

router = APIRouter(prefix="/admin")


@router.get("/payment-channel", response_model=PaymentChannelStatusResponse)
async def payment_channel_status(
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> PaymentChannelStatusResponse:
    return PaymentChannelStatusResponse(**orchestrator.payment_channel_status())


@router.put("/payment-channel", response_model=WorkflowResponse)
async def set_payment_channel(
    payload: PaymentChannelRequest,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    return to_response(await orchestrator.set_payment_channel(payload.channel))


@router.put("/pricing", response_model=WorkflowResponse)
async def set_pricing(
    payload: PricingRequest,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    if payload.strategy:
        return to_response(
            await orchestrator.set_pricing_strategy(payload.strategy, payload.multiplier)
        )
    if payload.multiplier is not None:
        return to_response(await orchestrator.set_seasonal_multiplier(payload.multiplier))
    return to_response(
        await orchestrator.set_pricing_strategy(orchestrator.current_pricing_strategy.name)
    )


@router.post("/rooms/{room_id}/clean", response_model=WorkflowResponse)
async def mark_room_clean(
    room_id: int,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    return to_response(await orchestrator.mark_room_clean(room_id))


@router.put("/rooms/{room_id}/maintenance", response_model=WorkflowResponse)
async def set_room_maintenance(
    room_id: int,
    payload: MaintenanceRequest,
    orchestrator: BookingOrchestrator = Depends(get_orchestrator),
) -> WorkflowResponse:
    return to_response(
        await orchestrator.set_room_maintenance(room_id, payload.under_maintenance)
    )
