import logging

from app.models import ActorRole, BookingStatus
from app.services.booking_state_machine import attempt_transition
from app.utils.status_logger import register_status_listeners


def test_status_change_is_logged(db, make_booking, caplog):
    register_status_listeners()
    booking = make_booking()
    caplog.set_level(logging.INFO, logger="app.utils.status_logger")

    attempt_transition(db, booking.id, BookingStatus.INQUIRY, BookingStatus.QUOTED, ActorRole.ARTIST)

    assert any(
        f"Booking id={booking.id} status changed from inquiry to quoted" in r.getMessage()
        for r in caplog.records
    )


def test_registering_twice_is_harmless(db, make_booking, caplog):
    register_status_listeners()
    register_status_listeners()
    booking = make_booking()
    caplog.set_level(logging.INFO, logger="app.utils.status_logger")

    attempt_transition(db, booking.id, BookingStatus.INQUIRY, BookingStatus.QUOTED, ActorRole.ARTIST)

    messages = [r.getMessage() for r in caplog.records if "status changed" in r.getMessage()]
    assert len(messages) == 1
