from typing import Dict, Optional
from fastapi import HTTPException, status
import logging

from ..models.booking_status import TransitionErrorCode

logger = logging.getLogger(__name__)

TRANSITION_ERROR_STATUS: Dict[TransitionErrorCode, int] = {
    TransitionErrorCode.BOOKING_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    TransitionErrorCode.UNAUTHORIZED_ACTOR: status.HTTP_403_FORBIDDEN,
    TransitionErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    TransitionErrorCode.TERMINAL_STATE: status.HTTP_422_UNPROCESSABLE_ENTITY,
    TransitionErrorCode.INVALID_TRANSITION: status.HTTP_422_UNPROCESSABLE_ENTITY,
    TransitionErrorCode.INVALID_PAYLOAD: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def error_response(
    message: str,
    field_errors: Dict[str, str],
    code: int = status.HTTP_422_UNPROCESSABLE_ENTITY,
) -> HTTPException:
    """Return an HTTPException with a consistent structure and log details."""
    logger.error("%s %s", message, field_errors)
    detail = {"message": message, "field_errors": field_errors}
    return HTTPException(status_code=code, detail=detail)


def transition_error_response(
    reason: TransitionErrorCode, message: Optional[str] = None
) -> HTTPException:
    """Map a rejected transition onto an HTTP error (409 means re-read and retry)."""
    return error_response(
        message or reason.value,
        {"status": reason.value},
        TRANSITION_ERROR_STATUS.get(reason, status.HTTP_422_UNPROCESSABLE_ENTITY),
    )
