import enum
from sqlalchemy import Column, Integer, ForeignKey, Date, Numeric, String, JSON, Enum as SQLAlchemyEnum

from .base import BaseModel


class DocumentType(str, enum.Enum):
    QUOTATION = "quotation"
    INVOICE = "invoice"


class PaymentStatus(str, enum.Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class FinancialDocumentRecord(BaseModel):
    """An issued quotation or invoice.

    Rows are append-only: the computed snapshot in ``payload`` is frozen at
    issue time and corrections are stored as new rows pointing at the
    original through ``amends_number``.
    """

    __tablename__ = "financial_documents"

    id = Column(Integer, primary_key=True, index=True)
    document_number = Column(String, nullable=False, unique=True, index=True)
    document_type = Column(SQLAlchemyEnum(DocumentType), nullable=False)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    amends_number = Column(String, nullable=True)
    issue_date = Column(Date, nullable=False)
    locale = Column(String(8), nullable=False)
    currency = Column(String(3), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)
    payment_status = Column(SQLAlchemyEnum(PaymentStatus), nullable=False, default=PaymentStatus.UNPAID)
    payload = Column(JSON, nullable=False)


class DocumentSequence(BaseModel):
    """Per-series counter backing PREFIX-YYYYMM-00001 numbering."""

    __tablename__ = "document_sequences"

    series_key = Column(String, primary_key=True)
    current_seq = Column(Integer, nullable=False, default=0)
