from .crud_booking import booking
from .crud_document import (
    allocate_document_number,
    get_document,
    issue_amendment,
    issue_invoice,
    issue_quotation,
    latest_document,
)
