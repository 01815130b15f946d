"""The one rounding primitive every money-producing function goes through."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, localcontext
from typing import Any, Optional

_UNIT = Decimal("1")
# Anything past 10**100 is not an amount of money
_MAX_ADJUSTED = 100


def to_decimal(value: Any) -> Optional[Decimal]:
    """Return ``value`` as a finite Decimal, or None when it is not a usable number.

    Floats go through ``str`` so ``2500.6`` stays ``2500.6`` rather than its
    binary expansion. Booleans are rejected even though they are ints, and so
    are magnitudes beyond ``10**100``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError, TypeError):
            return None
    if not result.is_finite() or result.adjusted() > _MAX_ADJUSTED:
        return None
    return result


def round_money(value: Decimal, places: int = 0) -> Decimal:
    """Round half away from zero at unit granularity (or ``places`` decimals)."""
    quantum = _UNIT if places <= 0 else Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # quantize needs every integer digit to fit in the context precision
        ctx.prec = max(ctx.prec, value.adjusted() + max(places, 0) + 2)
        return value.quantize(quantum, rounding=ROUND_HALF_UP)


def group_thousands(value: Decimal, places: int = 0) -> str:
    """``2500`` -> ``"2,500"``; ``2500.5`` with places=2 -> ``"2,500.50"``."""
    rounded = round_money(value, places)
    if places <= 0:
        return f"{int(rounded):,}"
    return f"{rounded:,.{places}f}"


def plain_number(value: Decimal) -> str:
    """Render without exponent or trailing zeros: ``30.00`` -> ``"30"``."""
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")
