from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from .. import crud, schemas
from ..models.booking_status import ActorRole
from ..services.booking_state_machine import allowed_targets, attempt_transition
from ..utils.errors import error_response, transition_error_response
from .dependencies import get_actor_role, get_db

router = APIRouter(tags=["bookings"])


@router.post("/", response_model=schemas.BookingRead, status_code=status.HTTP_201_CREATED)
def create_booking(
    *,
    db: Session = Depends(get_db),
    booking_in: schemas.BookingCreate,
) -> Any:
    """Open a new booking in INQUIRY."""
    return crud.booking.create_booking(db, booking_in)


@router.get("/{booking_id}", response_model=schemas.BookingRead)
def read_booking(booking_id: int, db: Session = Depends(get_db)) -> Any:
    db_booking = crud.booking.get_booking(db, booking_id)
    if db_booking is None:
        raise error_response("Booking not found", {"booking_id": "not_found"}, status.HTTP_404_NOT_FOUND)
    return db_booking


@router.get("/{booking_id}/transitions")
def read_allowed_transitions(booking_id: int, db: Session = Depends(get_db)) -> Any:
    """Statuses reachable from the booking's current status, for UI buttons."""
    db_booking = crud.booking.get_booking(db, booking_id)
    if db_booking is None:
        raise error_response("Booking not found", {"booking_id": "not_found"}, status.HTTP_404_NOT_FOUND)
    return {
        "status": db_booking.status.value,
        "allowed": sorted(s.value for s in allowed_targets(db_booking.status)),
    }


@router.post("/{booking_id}/transitions", response_model=schemas.TransitionResult)
def transition_booking(
    booking_id: int,
    transition_in: schemas.TransitionRequest,
    db: Session = Depends(get_db),
    actor: ActorRole = Depends(get_actor_role),
) -> Any:
    """Move a booking along the status graph.

    Responds 409 when ``expected_status`` is stale; the client should re-read
    the booking and retry.
    """
    result = attempt_transition(
        db,
        booking_id,
        transition_in.expected_status,
        transition_in.target_status,
        actor,
        transition_in.payload,
    )
    if not result.ok:
        raise transition_error_response(result.reason, result.message)
    return result
