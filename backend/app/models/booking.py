# backend/app/models/booking.py

from sqlalchemy import Column, Integer, Date, DateTime, Numeric, String, Enum as SQLAlchemyEnum

from .base import BaseModel
from .booking_status import BookingStatus

class Booking(BaseModel):
    __tablename__ = "bookings"

    id          = Column(Integer, primary_key=True, index=True)
    artist_id   = Column(Integer, index=True, nullable=True)
    customer_id = Column(Integer, index=True, nullable=True)
    status      = Column(
        SQLAlchemyEnum(
            BookingStatus,
            name="bookingstatus",
            values_callable=lambda enum: [e.value for e in enum],
        ),
        default=BookingStatus.INQUIRY,
        nullable=False,
        index=True,
    )

    # Event details
    event_date     = Column(Date, nullable=False)
    event_type     = Column(String, nullable=True)
    venue          = Column(String, nullable=True)
    duration_hours = Column(Numeric(6, 2), nullable=False)

    # Pricing; hourly_rate is NULL when the artist asks for contact-for-pricing
    hourly_rate        = Column(Numeric(10, 2), nullable=True)
    minimum_hours      = Column(Integer, nullable=True)
    travel_cost        = Column(Numeric(10, 2), nullable=True)
    travel_distance_km = Column(Numeric(8, 1), nullable=True)
    quoted_price       = Column(Numeric(10, 2), nullable=True)
    final_price        = Column(Numeric(10, 2), nullable=True)
    deposit_amount     = Column(Numeric(10, 2), nullable=True)
    deposit_percentage = Column(Numeric(5, 2), nullable=True)
    currency           = Column(String(3), nullable=False, default="THB")

    # Snapshots used on quotations/invoices
    artist_name      = Column(String, nullable=True)
    artist_category  = Column(String, nullable=True)
    customer_name    = Column(String, nullable=True)
    customer_email   = Column(String, nullable=True)
    customer_phone   = Column(String, nullable=True)
    customer_company = Column(String, nullable=True)
    customer_tax_id  = Column(String, nullable=True)

    # Transition stamps
    quoted_at           = Column(DateTime, nullable=True)
    confirmed_at        = Column(DateTime, nullable=True)
    paid_at             = Column(DateTime, nullable=True)
    completed_at        = Column(DateTime, nullable=True)
    cancelled_at        = Column(DateTime, nullable=True)
    cancellation_reason = Column(String, nullable=True)

    # Optimistic concurrency: every flush runs UPDATE ... WHERE version = :seen
    version = Column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": version}
