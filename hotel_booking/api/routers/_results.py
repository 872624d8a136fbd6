from fastapi import HTTPException, status

from hotel_booking.api.schemas.booking import WorkflowResponse
from hotel_booking.application.dtos.booking_dto import WorkflowResult

HTTP_STATUS_BY_CODE = {
    "VALIDATION_ERROR": 422,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ROOM_UNAVAILABLE": status.HTTP_409_CONFLICT,
    "STATE_CONFLICT": status.HTTP_409_CONFLICT,
    "PAYMENT_DECLINED": status.HTTP_402_PAYMENT_REQUIRED,
}


def to_response(result: WorkflowResult) -> WorkflowResponse:
    """Convierte un WorkflowResult fallido en HTTPException con su código."""
    if not result.success:
        raise HTTPException(
            status_code=HTTP_STATUS_BY_CODE.get(
                result.code or "", status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            detail={"code": result.code, "message": result.message},
        )
    return WorkflowResponse.from_result(result)
