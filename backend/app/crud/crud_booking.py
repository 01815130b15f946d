import logging
from typing import Any, Mapping, Optional

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from .. import models, schemas
from ..core.config import settings
from ..models.booking_status import BookingStatus

logger = logging.getLogger(__name__)


class CRUDBooking:
    def get_booking(self, db: Session, booking_id: int) -> Optional[models.Booking]:
        return db.query(models.Booking).filter(models.Booking.id == booking_id).first()

    def create_booking(self, db: Session, booking_in: schemas.BookingCreate) -> models.Booking:
        db_booking = models.Booking(
            **booking_in.model_dump(),
            currency=settings.DEFAULT_CURRENCY,
            status=BookingStatus.INQUIRY,  # Every booking starts as an inquiry
        )
        db.add(db_booking)
        db.commit()
        db.refresh(db_booking)
        return db_booking

    def apply_changes(
        self, db: Session, db_booking: models.Booking, changes: Mapping[str, Any]
    ) -> bool:
        """Flush ``changes`` guarded by the row version read with ``db_booking``.

        Returns False (and rolls back) when another writer committed first;
        the caller must re-read and retry. Nothing is committed here.
        """
        for field, value in changes.items():
            setattr(db_booking, field, value)
        try:
            db.flush()
        except StaleDataError:
            db.rollback()
            logger.warning("Booking id=%s changed concurrently; write rejected", db_booking.id)
            return False
        return True


booking = CRUDBooking()
