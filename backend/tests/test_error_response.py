import logging
import pytest
from fastapi import HTTPException

from app.models import TransitionErrorCode
from app.utils.errors import error_response, transition_error_response


def test_error_response_logs(caplog):
    caplog.set_level(logging.ERROR, logger="app.utils.errors")
    with pytest.raises(HTTPException):
        raise error_response("Invalid", {"field": "bad"})
    assert any(
        "Invalid" in r.getMessage() and "'field': 'bad'" in r.getMessage()
        for r in caplog.records
    )


@pytest.mark.parametrize("reason,code", [
    (TransitionErrorCode.BOOKING_NOT_FOUND, 404),
    (TransitionErrorCode.UNAUTHORIZED_ACTOR, 403),
    (TransitionErrorCode.CONFLICT, 409),
    (TransitionErrorCode.TERMINAL_STATE, 422),
    (TransitionErrorCode.INVALID_TRANSITION, 422),
    (TransitionErrorCode.INVALID_PAYLOAD, 422),
])
def test_transition_error_status_codes(reason, code):
    exc = transition_error_response(reason, "nope")
    assert exc.status_code == code
    assert exc.detail == {"message": "nope", "field_errors": {"status": reason.value}}


def test_transition_error_defaults_message_to_code():
    exc = transition_error_response(TransitionErrorCode.CONFLICT)
    assert exc.detail["message"] == "CONFLICT"
