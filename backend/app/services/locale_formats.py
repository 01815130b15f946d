"""Locale lookup table for money text.

Every locale-dependent string the pricing and document code produces comes
from a row in ``LOCALE_FORMATS``. Adding a locale means adding a row here;
callers never branch on the locale code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..core.config import settings


@dataclass(frozen=True)
class LocaleFormat:
    code: str
    # {amount} is an already grouped number such as "2,500"
    price: str
    price_range: str
    compact: str
    hourly: str
    minimum_hours: str
    package: str
    from_price: str
    from_label: str
    for_label: str
    deposit_amount: str
    deposit_amount_with_percentage: str
    deposit_percentage_only: str
    deposit_not_specified: str
    price_not_set: str
    contact_for_pricing: str
    negotiable: str
    not_available: str
    list_separator: str
    units: dict[str, str] = field(default_factory=dict)
    # Document copy
    performance_description: str = ""
    package_description: str = ""
    travel_description: str = ""
    quotation_payment_terms: str = ""
    invoice_payment_terms: str = ""
    quotation_terms: tuple[str, ...] = ()
    invoice_terms: tuple[str, ...] = ()

    def unit(self, key: str) -> str:
        """Translate a unit key (``hour``, ``trip``...); unknown keys pass through."""
        return self.units.get(key, key)


LOCALE_FORMATS: dict[str, LocaleFormat] = {
    "en": LocaleFormat(
        code="en",
        price="฿{amount}",
        price_range="฿{low} - ฿{high}",
        compact="฿{amount}K",
        hourly="{price}/{unit}",
        minimum_hours=" (Min. {hours} hours)",
        package="{price} {label} {duration}",
        from_price="{label} {price}/{unit}",
        from_label="From",
        for_label="for",
        deposit_amount="Deposit: {price}",
        deposit_amount_with_percentage="Deposit: {price} ({percentage}%)",
        deposit_percentage_only="{percentage}% deposit required",
        deposit_not_specified="Deposit not specified",
        price_not_set="Price not set",
        contact_for_pricing="Contact for pricing",
        negotiable="Negotiable",
        not_available="N/A",
        list_separator=", ",
        units={"hour": "hour", "hours": "hours", "trip": "trip", "event": "event", "item": "item"},
        performance_description="{artist} Performance - {category}",
        package_description="{artist} Performance Package - {category}",
        travel_description="Travel Expenses ({distance} km)",
        quotation_payment_terms=(
            "50% deposit required to confirm booking. Balance due 7 days before event."
        ),
        invoice_payment_terms="Payment due within 7 days of the invoice date.",
        quotation_terms=(
            "This quotation is valid for 30 days from the date of issue.",
            "Prices include artist performance fee for the specified duration.",
            "Additional hours will be charged at the same hourly rate.",
            "Cancellation must be made at least 15 days before the event for a 50% refund.",
            "Force majeure events (weather, government restrictions) may result in rescheduling.",
        ),
        invoice_terms=(
            "Please include the invoice number as the payment reference.",
            "Late payments may result in cancellation of the booking.",
        ),
    ),
    "th": LocaleFormat(
        code="th",
        price="{amount} บาท",
        price_range="{low} - {high} บาท",
        compact="{amount}K บาท",
        hourly="{price}/{unit}",
        minimum_hours=" (ขั้นต่ำ {hours} ชั่วโมง)",
        package="{price} {label} {duration}",
        from_price="{label} {price}/{unit}",
        from_label="เริ่มต้นที่",
        for_label="สำหรับ",
        deposit_amount="มัดจำ: {price}",
        deposit_amount_with_percentage="มัดจำ: {price} ({percentage}%)",
        deposit_percentage_only="ต้องชำระมัดจำ {percentage}%",
        deposit_not_specified="ไม่ระบุค่ามัดจำ",
        price_not_set="ไม่ระบุราคา",
        contact_for_pricing="ติดต่อสอบถามราคา",
        negotiable="ราคาต่อรองได้",
        not_available="N/A",
        list_separator=", ",
        units={"hour": "ชั่วโมง", "hours": "ชั่วโมง", "trip": "ครั้ง", "event": "งาน", "item": "รายการ"},
        performance_description="การแสดงของ {artist} - {category}",
        package_description="แพ็กเกจการแสดงของ {artist} - {category}",
        travel_description="ค่าเดินทาง ({distance} กม.)",
        quotation_payment_terms="ต้องชำระมัดจำ 50% เพื่อยืนยันการจอง ส่วนที่เหลือชำระก่อนงาน 7 วัน",
        invoice_payment_terms="กรุณาชำระเงินภายใน 7 วันนับจากวันที่ออกใบแจ้งหนี้",
        quotation_terms=(
            "ใบเสนอราคานี้มีอายุ 30 วันนับจากวันที่ออก",
            "ราคารวมค่าแสดงของศิลปินตามระยะเวลาที่กำหนด",
            "ชั่วโมงเพิ่มเติมจะคิดตามอัตราต่อชั่วโมงเท่ากัน",
            "การยกเลิกต้องแจ้งล่วงหน้าอย่างน้อย 15 วันก่อนงานเพื่อคืนเงิน 50%",
            "เหตุสุดวิสัย (สภาพอากาศ ข้อจำกัดของรัฐบาล) อาจส่งผลให้ต้องเลื่อนงาน",
        ),
        invoice_terms=(
            "กรุณาระบุเลขที่ใบแจ้งหนี้เป็นข้อมูลอ้างอิงการชำระเงิน",
            "การชำระเงินล่าช้าอาจส่งผลให้การจองถูกยกเลิก",
        ),
    ),
}


def supported_locales() -> tuple[str, ...]:
    return tuple(LOCALE_FORMATS)


def resolve_locale(locale: Optional[str]) -> str:
    """Normalize ``"TH"``, ``"th-TH"`` or ``"th_TH"`` to a table key.

    Unknown or empty codes resolve to the configured default locale.
    """
    default = settings.DEFAULT_LOCALE if settings.DEFAULT_LOCALE in LOCALE_FORMATS else "en"
    if not locale:
        return default
    code = str(locale).strip().lower().replace("_", "-").split("-", 1)[0]
    return code if code in LOCALE_FORMATS else default


def get_locale_format(locale: Optional[str] = None) -> LocaleFormat:
    return LOCALE_FORMATS[resolve_locale(locale)]
