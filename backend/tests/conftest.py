from datetime import date
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv
import pytest

# Load environment variables for tests before anything imports app.database
load_dotenv(Path(__file__).resolve().parents[1] / ".env.test")

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app import models  # noqa: E402
from app.models.base import BaseModel  # noqa: E402


@pytest.fixture
def Session():
    """Session factory bound to a fresh in-memory database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    BaseModel.metadata.create_all(engine)
    return sessionmaker(bind=engine)


@pytest.fixture
def db(Session):
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_booking(db):
    """Insert a booking (INQUIRY unless told otherwise) and return it."""

    def _make(**overrides):
        fields = dict(
            event_date=date(2030, 1, 15),
            event_type="Wedding",
            venue="Riverside Hall",
            duration_hours=Decimal("4"),
            hourly_rate=Decimal("2500"),
            currency="THB",
            artist_name="DJ Nok",
            artist_category="DJ",
            customer_name="Somchai",
            customer_email="somchai@example.com",
            status=models.BookingStatus.INQUIRY,
        )
        fields.update(overrides)
        booking = models.Booking(**fields)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make
