from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal
from ..models.booking_status import ActorRole, BookingStatus, TransitionErrorCode


# Properties to receive on item creation; status always starts at INQUIRY
class BookingCreate(BaseModel):
    artist_id: Optional[int] = None
    customer_id: Optional[int] = None
    event_date: date
    event_type: Optional[str] = None
    venue: Optional[str] = None
    duration_hours: Decimal = Field(gt=0)
    # None means the artist wants to be contacted for pricing
    hourly_rate: Optional[Decimal] = Field(default=None, ge=0)
    minimum_hours: Optional[int] = Field(default=None, ge=1)
    travel_cost: Optional[Decimal] = Field(default=None, ge=0)
    travel_distance_km: Optional[Decimal] = Field(default=None, ge=0)
    deposit_percentage: Optional[Decimal] = Field(default=None, gt=0, le=100)
    artist_name: Optional[str] = None
    artist_category: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    customer_company: Optional[str] = None
    customer_tax_id: Optional[str] = None


class BookingRead(BookingCreate):
    id: int
    status: BookingStatus
    currency: str
    quoted_price: Optional[Decimal] = None
    final_price: Optional[Decimal] = None
    deposit_amount: Optional[Decimal] = None
    quoted_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    model_config = {"from_attributes": True}


class TransitionPayload(BaseModel):
    """Optional data carried by a status change.

    ``quoted_price`` overrides the rate x hours estimate when quoting,
    ``final_price`` overrides the quoted price when confirming or marking
    paid, and ``cancellation_reason`` is mandatory for CANCELLED.
    """

    quoted_price: Optional[Decimal] = None
    final_price: Optional[Decimal] = None
    deposit_amount: Optional[Decimal] = None
    deposit_percentage: Optional[Decimal] = None
    cancellation_reason: Optional[str] = None

    @field_validator("cancellation_reason", mode="before")
    def strip_reason(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v


class TransitionRequest(BaseModel):
    expected_status: BookingStatus
    target_status: BookingStatus
    payload: TransitionPayload = Field(default_factory=TransitionPayload)


class TransitionEvent(BaseModel):
    booking_id: int
    from_status: BookingStatus
    to_status: BookingStatus
    at: datetime
    actor: ActorRole


class TransitionResult(BaseModel):
    ok: bool
    booking: Optional[BookingRead] = None
    reason: Optional[TransitionErrorCode] = None
    message: Optional[str] = None
    event: Optional[TransitionEvent] = None
