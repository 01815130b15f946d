from .booking import (
    BookingCreate,
    BookingRead,
    TransitionEvent,
    TransitionPayload,
    TransitionRequest,
    TransitionResult,
)
from .financial_document import (
    AddOn,
    DocumentIssueRequest,
    FinancialDocument,
    FinancialDocumentRead,
    Issuer,
    LineItem,
)
