from typing import Any, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from .. import crud, schemas
from ..models.financial_document import DocumentType
from ..services.financial_documents import DocumentNotAllowed
from ..utils import error_response
from .dependencies import get_db

router = APIRouter(tags=["documents"])
logger = logging.getLogger(__name__)


def _issue(db: Session, booking_id: int, document_type: DocumentType, body: schemas.DocumentIssueRequest):
    db_booking = crud.booking.get_booking(db, booking_id)
    if db_booking is None:
        raise error_response("Booking not found", {"booking_id": "not_found"}, status.HTTP_404_NOT_FOUND)
    try:
        return crud.crud_document.issue_document(
            db,
            db_booking,
            document_type,
            locale=body.locale,
            vat_rate=body.vat_rate,
            paid_amount=body.paid_amount,
            add_ons=body.add_ons,
        )
    except DocumentNotAllowed as exc:
        raise error_response(str(exc), {"status": db_booking.status.value}, status.HTTP_409_CONFLICT)
    except IntegrityError:
        db.rollback()
        # Another request took the same document number first
        logger.warning("Document number collision for booking %s; client should retry", booking_id)
        raise error_response(
            "Document number already taken; retry the request",
            {"document_number": "conflict"},
            status.HTTP_409_CONFLICT,
        )


@router.post(
    "/bookings/{booking_id}/quotation",
    response_model=schemas.FinancialDocumentRead,
    status_code=status.HTTP_201_CREATED,
)
def issue_quotation(
    booking_id: int,
    body: Optional[schemas.DocumentIssueRequest] = None,
    db: Session = Depends(get_db),
) -> Any:
    return _issue(db, booking_id, DocumentType.QUOTATION, body or schemas.DocumentIssueRequest())


@router.post(
    "/bookings/{booking_id}/invoice",
    response_model=schemas.FinancialDocumentRead,
    status_code=status.HTTP_201_CREATED,
)
def issue_invoice(
    booking_id: int,
    body: Optional[schemas.DocumentIssueRequest] = None,
    db: Session = Depends(get_db),
) -> Any:
    return _issue(db, booking_id, DocumentType.INVOICE, body or schemas.DocumentIssueRequest())


@router.get("/documents/{document_number}", response_model=schemas.FinancialDocumentRead)
def read_document(document_number: str, db: Session = Depends(get_db)) -> Any:
    record = crud.get_document(db, document_number)
    if record is None:
        raise error_response("Document not found", {"document_number": "not_found"}, status.HTTP_404_NOT_FOUND)
    return record
