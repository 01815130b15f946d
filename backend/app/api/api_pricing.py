from decimal import Decimal
from typing import Any, Optional

from fastapi import APIRouter, Query

from ..services import pricing

router = APIRouter(tags=["pricing"])


@router.get("/estimate")
def estimate(
    hourly_rate: Optional[Decimal] = Query(default=None),
    hours: Optional[Decimal] = Query(default=None),
    minimum_hours: Optional[int] = Query(default=None),
    deposit_percentage: Optional[Decimal] = Query(default=None),
    locale: str = Query(default="en"),
) -> Any:
    """Display strings for a booking form; never fails on bad numbers."""
    total = pricing.estimated_total_amount(hourly_rate, hours)
    return {
        "hourly_rate": pricing.format_hourly_rate(hourly_rate, minimum_hours, locale),
        "estimated_total": pricing.calculate_estimated_total(hourly_rate, hours, locale),
        "estimated_total_compact": (
            pricing.format_compact_price(total, locale)
            if total is not None
            else pricing.contact_for_pricing_text(locale)
        ),
        "deposit": pricing.format_deposit(
            pricing.deposit_amount_for(total, deposit_percentage), deposit_percentage, locale
        ),
    }
