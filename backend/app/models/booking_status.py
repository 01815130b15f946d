import enum

class BookingStatus(str, enum.Enum):
    """Booking lifecycle states, from first inquiry to close-out."""
    INQUIRY = "inquiry"
    QUOTED = "quoted"
    CONFIRMED = "confirmed"
    PAID = "paid"
    COMPLETED = "completed"
    # Terminal abort state; always carries a reason
    CANCELLED = "cancelled"


class ActorRole(str, enum.Enum):
    """Who is asking for a status change."""
    CUSTOMER = "customer"
    ARTIST = "artist"
    OPERATOR = "operator"


class TransitionErrorCode(str, enum.Enum):
    """Why a requested status change was rejected."""
    BOOKING_NOT_FOUND = "BOOKING_NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    TERMINAL_STATE = "TERMINAL_STATE"
    UNAUTHORIZED_ACTOR = "UNAUTHORIZED_ACTOR"
    # The caller's view of the status is stale; re-read and retry
    CONFLICT = "CONFLICT"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
