"""Price text for the booking platform.

Every function here is pure and total: invalid input never raises and never
renders as ``NaN``; it degrades to the locale's placeholder text instead
("Price not set", "Contact for pricing", "N/A").

Rules shared by all formatters:

- ``฿2,500`` for the default locale, ``2,500 บาท`` for Thai
- whole numbers unless decimals are requested, thousands always grouped
- rounding is half away from zero, through ``app.utils.money.round_money``
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..utils.money import group_thousands, plain_number, round_money, to_decimal
from .locale_formats import LocaleFormat, get_locale_format

_ZERO = Decimal("0")
_THOUSAND = Decimal("1000")
_HUNDRED = Decimal("100")


def _positive(value: Any) -> Optional[Decimal]:
    amount = to_decimal(value)
    if amount is None or amount <= _ZERO:
        return None
    return amount


def _non_negative(value: Any) -> Optional[Decimal]:
    amount = to_decimal(value)
    if amount is None or amount < _ZERO:
        return None
    return amount


def _price_text(fmt: LocaleFormat, amount: Decimal, places: int = 0) -> str:
    return fmt.price.format(amount=group_thousands(amount, places))


# ─── Numeric helpers ──────────────────────────────────────────────────────────


def estimated_total_amount(hourly_rate: Any, hours: Any) -> Optional[Decimal]:
    """``hourly_rate * hours`` rounded to whole units, or None if either is <= 0."""
    rate = _positive(hourly_rate)
    duration = _positive(hours)
    if rate is None or duration is None:
        return None
    return round_money(rate * duration)


def line_amount(quantity: Any, unit_price: Any) -> Optional[Decimal]:
    qty = _non_negative(quantity)
    price = _non_negative(unit_price)
    if qty is None or price is None:
        return None
    return round_money(qty * price)


def vat_amount_for(subtotal: Any, vat_rate: Any) -> Optional[Decimal]:
    """``round(subtotal * vat_rate / 100)``; a rate of 0 gives 0."""
    base = _non_negative(subtotal)
    rate = _non_negative(vat_rate)
    if base is None or rate is None:
        return None
    return round_money(base * rate / _HUNDRED)


def deposit_amount_for(total: Any, percentage: Any) -> Optional[Decimal]:
    base = _positive(total)
    pct = _positive(percentage)
    if base is None or pct is None or pct > _HUNDRED:
        return None
    return round_money(base * pct / _HUNDRED)


# ─── Text ─────────────────────────────────────────────────────────────────────


def format_price(
    amount: Any,
    locale: Optional[str] = "en",
    show_currency: bool = True,
    show_decimals: bool = False,
) -> str:
    """Format an amount of baht.

    >>> format_price(2500)
    '฿2,500'
    >>> format_price(2500, locale="th")
    '2,500 บาท'
    >>> format_price(2500.5, show_decimals=True)
    '฿2,500.50'
    """
    fmt = get_locale_format(locale)
    value = _non_negative(amount)
    if value is None:
        return fmt.price_not_set
    places = 2 if show_decimals else 0
    if not show_currency:
        return group_thousands(value, places)
    return _price_text(fmt, value, places)


def format_price_range(
    min_price: Any,
    max_price: Any,
    unit: str = "",
    locale: Optional[str] = "en",
) -> str:
    """``฿2,500 - ฿5,000/hour``; collapses to one price when both bounds match."""
    fmt = get_locale_format(locale)
    low = _non_negative(min_price)
    high = _non_negative(max_price)
    if low is None or high is None:
        return fmt.contact_for_pricing
    unit = unit or ""
    if low == high:
        return _price_text(fmt, low) + unit
    return fmt.price_range.format(low=group_thousands(low), high=group_thousands(high)) + unit


def format_hourly_rate(
    rate: Any,
    minimum_hours: Any = None,
    locale: Optional[str] = "en",
) -> str:
    fmt = get_locale_format(locale)
    value = _positive(rate)
    if value is None:
        return fmt.contact_for_pricing
    result = fmt.hourly.format(price=_price_text(fmt, value), unit=fmt.unit("hour"))
    minimum = to_decimal(minimum_hours)
    if minimum is not None and minimum > 1:
        result += fmt.minimum_hours.format(hours=plain_number(minimum))
    return result


def format_package_price(price: Any, duration: str, locale: Optional[str] = "en") -> str:
    """``฿15,000 for 4 hours``."""
    fmt = get_locale_format(locale)
    value = _positive(price)
    if value is None:
        return fmt.contact_for_pricing
    return fmt.package.format(price=_price_text(fmt, value), label=fmt.for_label, duration=duration)


def format_deposit(
    amount: Any = None,
    percentage: Any = None,
    locale: Optional[str] = "en",
) -> str:
    """Render a deposit given an amount, a percentage, both, or neither."""
    fmt = get_locale_format(locale)
    value = _positive(amount)
    pct = _positive(percentage)
    if value is not None and pct is not None:
        return fmt.deposit_amount_with_percentage.format(
            price=_price_text(fmt, value), percentage=plain_number(pct)
        )
    if value is not None:
        return fmt.deposit_amount.format(price=_price_text(fmt, value))
    if pct is not None:
        return fmt.deposit_percentage_only.format(percentage=plain_number(pct))
    return fmt.deposit_not_specified


def format_from_price(amount: Any, unit: str = "hour", locale: Optional[str] = "en") -> str:
    """Starting-price label, e.g. ``From ฿2,500/hour``."""
    fmt = get_locale_format(locale)
    value = _positive(amount)
    if value is None:
        return fmt.contact_for_pricing
    return fmt.from_price.format(
        label=fmt.from_label, price=_price_text(fmt, value), unit=fmt.unit(unit or "hour")
    )


def calculate_estimated_total(hourly_rate: Any, hours: Any, locale: Optional[str] = "en") -> str:
    total = estimated_total_amount(hourly_rate, hours)
    if total is None:
        return get_locale_format(locale).contact_for_pricing
    return format_price(total, locale=locale)


def format_compact_price(amount: Any, locale: Optional[str] = "en") -> str:
    """Short card text: under 1,000 in full, otherwise ``฿2.5K`` / ``฿15K``."""
    fmt = get_locale_format(locale)
    value = _non_negative(amount)
    if value is None:
        return fmt.not_available
    if value < _THOUSAND:
        return _price_text(fmt, value)
    thousands = round_money(value / _THOUSAND, 1)
    if thousands == thousands.to_integral_value():
        text = str(int(thousands))
    else:
        text = format(thousands, "f")
    return fmt.compact.format(amount=text)


def should_show_contact_for_pricing(price: Any) -> bool:
    return _positive(price) is None


def contact_for_pricing_text(locale: Optional[str] = "en") -> str:
    return get_locale_format(locale).contact_for_pricing


def negotiable_text(locale: Optional[str] = "en") -> str:
    return get_locale_format(locale).negotiable
