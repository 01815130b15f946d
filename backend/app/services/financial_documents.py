from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, List, Optional, Sequence

from ..core.config import settings
from ..models.booking_status import BookingStatus
from ..models.financial_document import DocumentType, PaymentStatus
from ..schemas.financial_document import AddOn, FinancialDocument, Issuer, LineItem
from ..utils.money import plain_number, round_money, to_decimal
from .locale_formats import LOCALE_FORMATS, get_locale_format, resolve_locale
from .pricing import estimated_total_amount, format_price, vat_amount_for

logger = logging.getLogger(__name__)

_ZERO = Decimal("0")

QUOTABLE_STATUSES = frozenset(
    {BookingStatus.QUOTED, BookingStatus.CONFIRMED, BookingStatus.PAID, BookingStatus.COMPLETED}
)
INVOICEABLE_STATUSES = frozenset(
    {BookingStatus.CONFIRMED, BookingStatus.PAID, BookingStatus.COMPLETED}
)


class DocumentNotAllowed(ValueError):
    """The booking is not in a state that allows this document."""


def _read(source: Any, key: str) -> Any:
    if source is None:
        return None
    if isinstance(source, dict):
        return source.get(key)
    return getattr(source, key, None)


def _descriptions(template_attr: str, **values: Any) -> dict[str, str]:
    """Render one description template in every supported locale."""
    return {
        code: getattr(fmt, template_attr).format(**values)
        for code, fmt in LOCALE_FORMATS.items()
    }


def _agreed_price(booking: Any) -> Optional[Decimal]:
    for key in ("final_price", "quoted_price"):
        value = to_decimal(_read(booking, key))
        if value is not None and value >= _ZERO:
            return value
    return None


def booking_line_items(
    booking: Any,
    locale: Optional[str] = None,
    add_ons: Sequence[AddOn] = (),
) -> List[LineItem]:
    """Derive line items from a booking: performance fee, travel, add-ons.

    The performance line is ``duration x hourly rate`` when that matches the
    agreed price (final, else quoted). A different agreed price, or no rate
    at all, becomes a single package line so the document total always
    matches what the parties agreed.
    """
    fmt = get_locale_format(locale)
    artist = _read(booking, "artist_name") or "Artist"
    category = _read(booking, "artist_category") or "Performer"
    hours = to_decimal(_read(booking, "duration_hours"))
    rate = to_decimal(_read(booking, "hourly_rate"))
    agreed = _agreed_price(booking)
    estimate = estimated_total_amount(rate, hours)

    items: List[LineItem] = []
    if estimate is not None and (agreed is None or round_money(agreed) == estimate):
        items.append(
            LineItem(
                no=1,
                description=_descriptions("performance_description", artist=artist, category=category),
                quantity=hours,
                unit=fmt.unit("hours"),
                unit_price=rate,
            )
        )
    elif agreed is not None:
        items.append(
            LineItem(
                no=1,
                description=_descriptions("package_description", artist=artist, category=category),
                quantity=Decimal("1"),
                unit=fmt.unit("event"),
                unit_price=agreed,
            )
        )

    travel = to_decimal(_read(booking, "travel_cost"))
    if travel is not None and travel > _ZERO:
        distance = to_decimal(_read(booking, "travel_distance_km")) or _ZERO
        items.append(
            LineItem(
                no=len(items) + 1,
                description=_descriptions("travel_description", distance=plain_number(distance)),
                quantity=Decimal("1"),
                unit=fmt.unit("trip"),
                unit_price=travel,
            )
        )

    for add_on in add_ons:
        items.append(
            LineItem(
                no=len(items) + 1,
                description=dict(add_on.description),
                quantity=add_on.quantity,
                unit=fmt.unit(add_on.unit),
                unit_price=add_on.unit_price,
            )
        )
    return items


def issuer_snapshot() -> Issuer:
    """The configured company details, copied into each document as issued."""
    return Issuer(
        name={"en": settings.ISSUER_NAME, "th": settings.ISSUER_NAME_TH},
        tax_id=settings.ISSUER_TAX_ID,
        address={"en": settings.ISSUER_ADDRESS, "th": settings.ISSUER_ADDRESS_TH},
        phone=settings.ISSUER_PHONE,
        email=settings.ISSUER_EMAIL,
        bank_name=settings.ISSUER_BANK_NAME,
        account_name=settings.ISSUER_ACCOUNT_NAME,
        account_number=settings.ISSUER_ACCOUNT_NUMBER,
        promptpay_number=settings.ISSUER_PROMPTPAY_NUMBER,
    )


def default_vat_rate(booking: Any) -> Decimal:
    """Corporate customers with a tax id are charged VAT; everyone else 0."""
    if _read(booking, "customer_tax_id"):
        return Decimal(settings.CORPORATE_VAT_RATE)
    return _ZERO


def derive_payment_status(total: Decimal, paid_amount: Decimal) -> PaymentStatus:
    if paid_amount >= total:
        return PaymentStatus.PAID
    if paid_amount > _ZERO:
        return PaymentStatus.PARTIAL
    return PaymentStatus.UNPAID


def _renumber(line_items: Iterable[LineItem]) -> List[LineItem]:
    return [
        item if item.no == index else item.model_copy(update={"no": index})
        for index, item in enumerate(line_items, start=1)
    ]


def _build(
    document_type: DocumentType,
    booking: Any,
    line_items: Sequence[LineItem],
    vat_rate: Any,
    locale: Optional[str],
    *,
    document_number: str,
    issue_date: Optional[date],
    paid_amount: Any = 0,
    amends: Optional[str] = None,
    issuer: Optional[Issuer] = None,
) -> FinancialDocument:
    code = resolve_locale(locale)
    fmt = LOCALE_FORMATS[code]
    rate = to_decimal(vat_rate)
    if rate is None or rate < _ZERO:
        raise ValueError(f"invalid VAT rate: {vat_rate!r}")
    paid = to_decimal(paid_amount)
    if paid is None or paid < _ZERO:
        raise ValueError(f"invalid paid amount: {paid_amount!r}")
    paid = round_money(paid)

    items = _renumber(line_items)
    subtotal = sum((item.amount for item in items), _ZERO)
    vat_amount = vat_amount_for(subtotal, rate)
    total = subtotal + vat_amount
    payment_status = derive_payment_status(total, paid)
    balance_due = _ZERO if payment_status == PaymentStatus.PAID else total - paid

    issued = issue_date or date.today()
    if document_type == DocumentType.QUOTATION:
        valid_until = issued + timedelta(days=settings.QUOTATION_VALID_DAYS)
        due_date = None
        payment_terms, terms = fmt.quotation_payment_terms, list(fmt.quotation_terms)
    else:
        valid_until = None
        due_date = issued + timedelta(days=settings.INVOICE_DUE_DAYS)
        payment_terms, terms = fmt.invoice_payment_terms, list(fmt.invoice_terms)

    document = FinancialDocument(
        document_type=document_type,
        document_number=document_number,
        issue_date=issued,
        valid_until=valid_until,
        due_date=due_date,
        locale=code,
        currency=_read(booking, "currency") or settings.DEFAULT_CURRENCY,
        amends=amends,
        issuer=issuer or issuer_snapshot(),
        booking_id=_read(booking, "id"),
        customer_name=_read(booking, "customer_name"),
        customer_company=_read(booking, "customer_company"),
        customer_email=_read(booking, "customer_email"),
        customer_phone=_read(booking, "customer_phone"),
        customer_tax_id=_read(booking, "customer_tax_id"),
        artist_name=_read(booking, "artist_name"),
        artist_category=_read(booking, "artist_category"),
        event_type=_read(booking, "event_type"),
        event_date=_read(booking, "event_date"),
        venue=_read(booking, "venue"),
        duration_hours=to_decimal(_read(booking, "duration_hours")),
        items=items,
        subtotal=subtotal,
        vat_rate=rate,
        vat_amount=vat_amount,
        total=total,
        payment_status=payment_status,
        paid_amount=paid,
        balance_due=balance_due,
        payment_terms=payment_terms,
        terms=terms,
        subtotal_display=format_price(subtotal, locale=code),
        vat_display=format_price(vat_amount, locale=code) if rate > _ZERO else None,
        total_display=format_price(total, locale=code),
        paid_display=format_price(paid, locale=code) if paid > _ZERO else None,
        balance_due_display=(
            format_price(balance_due, locale=code) if payment_status != PaymentStatus.PAID else None
        ),
    )
    logger.info(
        "Built %s %s booking=%s subtotal=%s vat=%s total=%s status=%s",
        document_type.value,
        document_number,
        document.booking_id,
        subtotal,
        vat_amount,
        total,
        payment_status.value,
    )
    return document


def _status_of(booking: Any) -> Optional[BookingStatus]:
    status = _read(booking, "status")
    try:
        return BookingStatus(getattr(status, "value", status))
    except ValueError:
        return None


def build_quotation(
    booking: Any,
    line_items: Sequence[LineItem],
    vat_rate: Any,
    locale: Optional[str] = None,
    *,
    document_number: str,
    issue_date: Optional[date] = None,
) -> FinancialDocument:
    """Quotation for a booking that already carries a quoted price."""
    if _status_of(booking) not in QUOTABLE_STATUSES or _read(booking, "quoted_price") is None:
        raise DocumentNotAllowed("a quotation needs a quoted, non-cancelled booking")
    return _build(
        DocumentType.QUOTATION,
        booking,
        line_items,
        vat_rate,
        locale,
        document_number=document_number,
        issue_date=issue_date,
    )


def build_invoice(
    booking: Any,
    line_items: Sequence[LineItem],
    vat_rate: Any,
    locale: Optional[str] = None,
    *,
    document_number: str,
    issue_date: Optional[date] = None,
    paid_amount: Any = 0,
) -> FinancialDocument:
    """Invoice for a confirmed, paid or completed booking."""
    if _status_of(booking) not in INVOICEABLE_STATUSES:
        raise DocumentNotAllowed("an invoice needs a confirmed or paid booking")
    return _build(
        DocumentType.INVOICE,
        booking,
        line_items,
        vat_rate,
        locale,
        document_number=document_number,
        issue_date=issue_date,
        paid_amount=paid_amount,
    )


def amend_document(
    original: FinancialDocument,
    *,
    document_number: str,
    line_items: Optional[Sequence[LineItem]] = None,
    vat_rate: Any = None,
    paid_amount: Any = None,
    locale: Optional[str] = None,
    issue_date: Optional[date] = None,
) -> FinancialDocument:
    """Issue a corrected copy of ``original`` that references it.

    ``original`` is left untouched; every computed field of the new document
    is recomputed from its own line items.
    """
    if document_number == original.document_number:
        raise ValueError("an amendment needs its own document number")
    reference = original.model_dump(
        include={
            "booking_id",
            "currency",
            "customer_name",
            "customer_company",
            "customer_email",
            "customer_phone",
            "customer_tax_id",
            "artist_name",
            "artist_category",
            "event_type",
            "event_date",
            "venue",
            "duration_hours",
        }
    )
    reference["id"] = reference.pop("booking_id")
    return _build(
        original.document_type,
        reference,
        original.items if line_items is None else line_items,
        original.vat_rate if vat_rate is None else vat_rate,
        locale or original.locale,
        document_number=document_number,
        issue_date=issue_date,
        paid_amount=original.paid_amount if paid_amount is None else paid_amount,
        amends=original.document_number,
        issuer=original.issuer,
    )
