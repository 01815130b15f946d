from decimal import Decimal

import pytest

from app.services import pricing


def test_format_price_default_and_thai_locale():
    assert pricing.format_price(2500) == "฿2,500"
    assert pricing.format_price(2500, locale="th") == "2,500 บาท"
    assert pricing.format_price(125000) == "฿125,000"
    assert pricing.format_price(1000000) == "฿1,000,000"


def test_format_price_options():
    assert pricing.format_price(2500, show_currency=False) == "2,500"
    assert pricing.format_price(2500.50, show_decimals=True) == "฿2,500.50"
    assert pricing.format_price(Decimal("1234.5"), locale="th", show_decimals=True) == "1,234.50 บาท"


def test_format_price_rounds_half_away_from_zero():
    assert pricing.format_price(2500.6) == "฿2,501"
    assert pricing.format_price(2500.4) == "฿2,500"
    assert pricing.format_price(2500.5) == "฿2,501"
    assert pricing.format_price(Decimal("0.5")) == "฿1"


@pytest.mark.parametrize("bad", [-100, float("nan"), float("inf"), None, "abc", True])
def test_format_price_invalid_falls_back(bad):
    assert pricing.format_price(bad) == "Price not set"
    assert pricing.format_price(bad, locale="th") == "ไม่ระบุราคา"


def test_format_price_accepts_numeric_strings():
    assert pricing.format_price("2500") == "฿2,500"


def test_format_price_is_deterministic():
    assert pricing.format_price(98765.43) == pricing.format_price(98765.43)


def test_unknown_locale_uses_default_row():
    assert pricing.format_price(2500, locale="fr") == "฿2,500"
    assert pricing.format_price(2500, locale="th-TH") == "2,500 บาท"


def test_format_hourly_rate():
    assert pricing.format_hourly_rate(2500) == "฿2,500/hour"
    assert pricing.format_hourly_rate(2500, 3) == "฿2,500/hour (Min. 3 hours)"
    assert pricing.format_hourly_rate(2500, 3, "th") == "2,500 บาท/ชั่วโมง (ขั้นต่ำ 3 ชั่วโมง)"
    assert pricing.format_hourly_rate(2500, 1) == "฿2,500/hour"
    assert pricing.format_hourly_rate(999999) == "฿999,999/hour"


def test_format_hourly_rate_invalid():
    assert pricing.format_hourly_rate(0) == "Contact for pricing"
    assert pricing.format_hourly_rate(-100) == "Contact for pricing"
    assert pricing.format_hourly_rate(None) == "Contact for pricing"
    assert pricing.format_hourly_rate(0, 3, "th") == "ติดต่อสอบถามราคา"


def test_format_price_range():
    assert pricing.format_price_range(2500, 5000) == "฿2,500 - ฿5,000"
    assert pricing.format_price_range(2500, 5000, unit="/hour") == "฿2,500 - ฿5,000/hour"
    assert pricing.format_price_range(2500, 5000, locale="th") == "2,500 - 5,000 บาท"


def test_format_price_range_collapses_equal_bounds():
    assert pricing.format_price_range(2500, 2500) == pricing.format_price(2500)
    assert pricing.format_price_range(2500, 2500, locale="th") == pricing.format_price(2500, locale="th")
    assert pricing.format_price_range(2500, 2500, unit="/event") == "฿2,500/event"


def test_format_price_range_invalid():
    assert pricing.format_price_range(-100, 5000) == "Contact for pricing"
    assert pricing.format_price_range(2500, -100) == "Contact for pricing"
    assert pricing.format_price_range(-100, -100, locale="th") == "ติดต่อสอบถามราคา"
    assert pricing.format_price_range(float("nan"), 100) == "Contact for pricing"


def test_format_from_price():
    assert pricing.format_from_price(2500) == "From ฿2,500/hour"
    assert pricing.format_from_price(15000, "event") == "From ฿15,000/event"
    assert pricing.format_from_price(2500, "hour", "th") == "เริ่มต้นที่ 2,500 บาท/ชั่วโมง"
    assert pricing.format_from_price(0) == "Contact for pricing"
    assert pricing.format_from_price(-100, "hour", "th") == "ติดต่อสอบถามราคา"


def test_format_package_price():
    assert pricing.format_package_price(15000, "4 hours") == "฿15,000 for 4 hours"
    assert pricing.format_package_price(15000, "4 hours", "th") == "15,000 บาท สำหรับ 4 hours"
    assert pricing.format_package_price(0, "Full event") == "Contact for pricing"
    assert pricing.format_package_price(-100, "Full event", "th") == "ติดต่อสอบถามราคา"


def test_format_deposit_four_renderings():
    assert pricing.format_deposit(5000) == "Deposit: ฿5,000"
    assert pricing.format_deposit(None, 30) == "30% deposit required"
    assert pricing.format_deposit(5000, 30) == "Deposit: ฿5,000 (30%)"
    assert pricing.format_deposit() == "Deposit not specified"


def test_format_deposit_thai():
    assert pricing.format_deposit(5000, None, "th") == "มัดจำ: 5,000 บาท"
    assert pricing.format_deposit(None, 30, "th") == "ต้องชำระมัดจำ 30%"
    assert pricing.format_deposit(5000, 30, "th") == "มัดจำ: 5,000 บาท (30%)"
    assert pricing.format_deposit(None, None, "th") == "ไม่ระบุค่ามัดจำ"


def test_format_deposit_fractional_percentage():
    assert pricing.format_deposit(None, Decimal("12.50")) == "12.5% deposit required"


def test_calculate_estimated_total():
    assert pricing.calculate_estimated_total(2500, 4) == "฿10,000"
    assert pricing.calculate_estimated_total(2500, 4, "th") == "10,000 บาท"
    assert pricing.calculate_estimated_total(1250, 2.5) == "฿3,125"


def test_calculate_estimated_total_invalid():
    assert pricing.calculate_estimated_total(0, 4) == "Contact for pricing"
    assert pricing.calculate_estimated_total(2500, 0) == "Contact for pricing"
    assert pricing.calculate_estimated_total(-100, 4, "th") == "ติดต่อสอบถามราคา"
    assert pricing.calculate_estimated_total(None, 4) == "Contact for pricing"


def test_format_compact_price():
    assert pricing.format_compact_price(500) == "฿500"
    assert pricing.format_compact_price(999) == "฿999"
    assert pricing.format_compact_price(1000) == "฿1K"
    assert pricing.format_compact_price(2500) == "฿2.5K"
    assert pricing.format_compact_price(15000) == "฿15K"
    assert pricing.format_compact_price(150000) == "฿150K"
    assert pricing.format_compact_price(1999) == "฿2K"
    assert pricing.format_compact_price(1250) == "฿1.3K"


def test_format_compact_price_thai_and_invalid():
    assert pricing.format_compact_price(2500, "th") == "2.5K บาท"
    assert pricing.format_compact_price(15000, "th") == "15K บาท"
    assert pricing.format_compact_price(-100) == "N/A"
    assert pricing.format_compact_price(float("nan")) == "N/A"


def test_contact_and_negotiable_text():
    assert pricing.should_show_contact_for_pricing(None) is True
    assert pricing.should_show_contact_for_pricing(0) is True
    assert pricing.should_show_contact_for_pricing(-100) is True
    assert pricing.should_show_contact_for_pricing(float("nan")) is True
    assert pricing.should_show_contact_for_pricing(2500) is False
    assert pricing.should_show_contact_for_pricing(0.01) is False
    assert pricing.contact_for_pricing_text() == "Contact for pricing"
    assert pricing.contact_for_pricing_text("th") == "ติดต่อสอบถามราคา"
    assert pricing.negotiable_text() == "Negotiable"
    assert pricing.negotiable_text("th") == "ราคาต่อรองได้"


def test_numeric_helpers():
    assert pricing.estimated_total_amount(2500, 4) == Decimal("10000")
    assert pricing.estimated_total_amount(0, 4) is None
    assert pricing.line_amount(Decimal("2.5"), Decimal("333")) == Decimal("833")
    assert pricing.vat_amount_for(Decimal("10000"), 7) == Decimal("700")
    assert pricing.vat_amount_for(Decimal("10050"), 7) == Decimal("704")
    assert pricing.vat_amount_for(Decimal("10000"), 0) == Decimal("0")
    assert pricing.deposit_amount_for(Decimal("10000"), 30) == Decimal("3000")
    assert pricing.deposit_amount_for(Decimal("10000"), 150) is None


def test_huge_amounts_still_format():
    assert pricing.format_price(10**28) == f"฿{10**28:,}"
    assert pricing.format_price(1e30) == f"฿{10**30:,}"
    assert pricing.format_compact_price(10**30) == f"฿{10**27}K"
    assert pricing.format_price_range(1, 10**29) == f"฿1 - ฿{10**29:,}"
    assert pricing.calculate_estimated_total(10**20, 10**10) == f"฿{10**30:,}"
    assert pricing.format_deposit(10**29, 30) == f"Deposit: ฿{10**29:,} (30%)"


def test_absurd_magnitudes_fall_back():
    assert pricing.format_price("1e500") == "Price not set"
    assert pricing.format_hourly_rate("1e500") == "Contact for pricing"
    assert pricing.format_compact_price("1e500") == "N/A"
