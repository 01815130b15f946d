from datetime import date, datetime, timezone
import logging
from typing import Any, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..core.config import settings
from ..models.financial_document import DocumentType
from ..schemas.financial_document import AddOn, FinancialDocument
from ..services.financial_documents import (
    amend_document,
    booking_line_items,
    build_invoice,
    build_quotation,
    default_vat_rate,
)

logger = logging.getLogger(__name__)


def _yyyymm_now() -> str:
    return datetime.now(timezone.utc).strftime("%Y%m")


def _prefix_for(document_type: DocumentType) -> str:
    if document_type == DocumentType.QUOTATION:
        return settings.QUOTATION_NUMBER_PREFIX
    return settings.INVOICE_NUMBER_PREFIX


def allocate_document_number(db: Session, prefix: str, yyyymm: Optional[str] = None) -> str:
    """Reserve and return the next number in the ``prefix`` series for a month.

    Format: ``PREFIX-YYYYMM-00001``. The counter row is flushed, not
    committed; it becomes durable together with the document that uses it.
    """
    yyyymm = yyyymm or _yyyymm_now()
    series_key = f"{prefix}-{yyyymm}"
    seq_row = db.get(models.DocumentSequence, series_key)
    if seq_row is None:
        seq_row = models.DocumentSequence(series_key=series_key, current_seq=0)
        db.add(seq_row)
    seq_row.current_seq = (seq_row.current_seq or 0) + 1
    db.flush()
    return f"{series_key}-{seq_row.current_seq:05d}"


def to_document(record: models.FinancialDocumentRecord) -> FinancialDocument:
    return FinancialDocument.model_validate(record.payload)


def get_document(db: Session, document_number: str) -> Optional[models.FinancialDocumentRecord]:
    return (
        db.query(models.FinancialDocumentRecord)
        .filter(models.FinancialDocumentRecord.document_number == document_number)
        .first()
    )


def latest_document(
    db: Session, booking_id: int, document_type: DocumentType
) -> Optional[models.FinancialDocumentRecord]:
    return (
        db.query(models.FinancialDocumentRecord)
        .filter(models.FinancialDocumentRecord.booking_id == booking_id)
        .filter(models.FinancialDocumentRecord.document_type == document_type)
        .order_by(models.FinancialDocumentRecord.id.desc())
        .first()
    )


def _store(db: Session, document: FinancialDocument) -> models.FinancialDocumentRecord:
    record = models.FinancialDocumentRecord(
        document_number=document.document_number,
        document_type=document.document_type,
        booking_id=document.booking_id,
        amends_number=document.amends,
        issue_date=document.issue_date,
        locale=document.locale,
        currency=document.currency,
        total=document.total,
        payment_status=document.payment_status,
        payload=document.model_dump(mode="json"),
    )
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    db.refresh(record)
    logger.info(
        "Issued %s %s for booking %s",
        document.document_type.value,
        document.document_number,
        document.booking_id,
    )
    return record


def issue_document(
    db: Session,
    booking: models.Booking,
    document_type: DocumentType,
    *,
    locale: Optional[str] = None,
    vat_rate: Any = None,
    paid_amount: Any = 0,
    add_ons: Sequence[AddOn] = (),
    issue_date: Optional[date] = None,
) -> models.FinancialDocumentRecord:
    """Build, number and store a quotation or invoice for ``booking``.

    Issuing twice for the same booking returns the latest stored document;
    use :func:`issue_amendment` to correct one.
    """
    existing = latest_document(db, booking.id, document_type)
    if existing is not None:
        logger.info(
            "%s already exists for booking %s: %s",
            document_type.value,
            booking.id,
            existing.document_number,
        )
        return existing

    items = booking_line_items(booking, locale, add_ons)
    rate = default_vat_rate(booking) if vat_rate is None else vat_rate
    number = allocate_document_number(db, _prefix_for(document_type))
    try:
        if document_type == DocumentType.QUOTATION:
            document = build_quotation(
                booking, items, rate, locale, document_number=number, issue_date=issue_date
            )
        else:
            document = build_invoice(
                booking,
                items,
                rate,
                locale,
                document_number=number,
                issue_date=issue_date,
                paid_amount=paid_amount,
            )
    except ValueError:
        # Release the reserved number
        db.rollback()
        raise
    return _store(db, document)


def issue_quotation(db: Session, booking: models.Booking, **kwargs: Any) -> models.FinancialDocumentRecord:
    return issue_document(db, booking, DocumentType.QUOTATION, **kwargs)


def issue_invoice(db: Session, booking: models.Booking, **kwargs: Any) -> models.FinancialDocumentRecord:
    return issue_document(db, booking, DocumentType.INVOICE, **kwargs)


def issue_amendment(
    db: Session,
    original: models.FinancialDocumentRecord,
    **changes: Any,
) -> models.FinancialDocumentRecord:
    """Store a corrected copy of ``original``; the original row is not touched."""
    number = allocate_document_number(db, _prefix_for(original.document_type))
    try:
        document = amend_document(to_document(original), document_number=number, **changes)
    except ValueError:
        db.rollback()
        raise
    return _store(db, document)
