from .booking import Booking
from .booking_status import BookingStatus, ActorRole, TransitionErrorCode
from .financial_document import (
    DocumentSequence,
    DocumentType,
    FinancialDocumentRecord,
    PaymentStatus,
)
from .outbox_event import OutboxEvent

__all__ = [
    "Booking",
    "BookingStatus",
    "ActorRole",
    "TransitionErrorCode",
    "DocumentSequence",
    "DocumentType",
    "FinancialDocumentRecord",
    "PaymentStatus",
    "OutboxEvent",
]
