from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from ..models.financial_document import DocumentType, PaymentStatus
from ..utils.money import round_money, to_decimal


class LineItem(BaseModel):
    """One row on a quotation or invoice.

    ``amount`` is always ``round(quantity * unit_price)``; a caller-supplied
    amount is discarded.
    """

    no: int = Field(ge=1)
    description: Dict[str, str]
    quantity: Decimal = Field(ge=0)
    unit: str
    unit_price: Decimal = Field(ge=0)
    amount: Decimal = Decimal("0")

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _recompute_amount(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            qty = to_decimal(data.get("quantity"))
            price = to_decimal(data.get("unit_price"))
            if qty is not None and price is not None:
                data["amount"] = round_money(qty * price)
        return data

    def description_for(self, locale: str) -> str:
        if locale in self.description:
            return self.description[locale]
        return next(iter(self.description.values()), "")


class AddOn(BaseModel):
    """Extra charge requested by the caller (equipment, extra set, ...)."""

    description: Dict[str, str]
    quantity: Decimal = Field(default=Decimal("1"), ge=0)
    unit: str = "item"
    unit_price: Decimal = Field(ge=0)


class Issuer(BaseModel):
    """Billing identity of the company issuing the document, frozen at issue time."""

    name: Dict[str, str]
    tax_id: str
    address: Dict[str, str]
    phone: Optional[str] = None
    email: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    promptpay_number: Optional[str] = None

    model_config = {"frozen": True}


class FinancialDocument(BaseModel):
    """Immutable quotation/invoice record, ready for an external renderer."""

    document_type: DocumentType
    document_number: str
    issue_date: date
    valid_until: Optional[date] = None
    due_date: Optional[date] = None
    locale: str
    currency: str
    amends: Optional[str] = None

    issuer: Issuer

    booking_id: Optional[int] = None
    customer_name: Optional[str] = None
    customer_company: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_tax_id: Optional[str] = None
    artist_name: Optional[str] = None
    artist_category: Optional[str] = None
    event_type: Optional[str] = None
    event_date: Optional[date] = None
    venue: Optional[str] = None
    duration_hours: Optional[Decimal] = None

    items: List[LineItem]
    subtotal: Decimal
    vat_rate: Decimal
    vat_amount: Decimal
    total: Decimal
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    paid_amount: Decimal = Decimal("0")
    balance_due: Decimal = Decimal("0")

    payment_terms: str = ""
    terms: List[str] = Field(default_factory=list)

    # Pre-formatted text so renderers never redo the arithmetic
    subtotal_display: str = ""
    vat_display: Optional[str] = None
    total_display: str = ""
    paid_display: Optional[str] = None
    balance_due_display: Optional[str] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_totals(self) -> "FinancialDocument":
        if self.subtotal != sum((item.amount for item in self.items), Decimal("0")):
            raise ValueError("subtotal must equal the sum of line item amounts")
        if self.total != self.subtotal + self.vat_amount:
            raise ValueError("total must equal subtotal + vat_amount")
        return self


class DocumentIssueRequest(BaseModel):
    locale: Optional[str] = None
    vat_rate: Optional[Decimal] = Field(default=None, ge=0)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0)
    add_ons: List[AddOn] = Field(default_factory=list)


class FinancialDocumentRead(BaseModel):
    id: int
    document_number: str
    document_type: DocumentType
    booking_id: int
    amends_number: Optional[str] = None
    issue_date: date
    total: Decimal
    payment_status: PaymentStatus
    payload: Dict[str, Any]

    model_config = {"from_attributes": True}
