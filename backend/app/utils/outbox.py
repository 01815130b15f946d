from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
import enum
import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..models.base import utcnow
from ..models.outbox_event import OutboxEvent


logger = logging.getLogger(__name__)

BOOKING_TRANSITION_TOPIC = "booking.transition"


def _json_default(o: Any):
    if isinstance(o, (datetime, date)):
        return o.isoformat()
    if isinstance(o, Decimal):
        return str(o)
    if isinstance(o, enum.Enum):
        return o.value
    return str(o)


def enqueue_outbox(
    db: Session,
    topic: str,
    payload: dict[str, Any],
    due_at: Optional[datetime] = None,
    commit: bool = True,
) -> OutboxEvent:
    """Add an outbox event row for an external delivery worker.

    With ``commit=False`` the row joins the caller's transaction, so the
    event is stored if and only if the caller's own write commits.
    """
    payload_str = json.dumps(payload, default=_json_default, separators=(",", ":"))
    event = OutboxEvent(topic=topic, payload_json=payload_str, due_at=due_at, attempt_count=0)
    db.add(event)
    if commit:
        db.commit()
        db.refresh(event)
        logger.info("outbox_enqueue topic=%s id=%s bytes=%s", topic, event.id, len(payload_str))
    else:
        logger.debug("outbox_enqueue topic=%s bytes=%s (pending commit)", topic, len(payload_str))
    return event


def pending_outbox(db: Session, topic: Optional[str] = None, limit: int = 100) -> List[OutboxEvent]:
    """Undelivered events that are due, oldest first."""
    now = utcnow()
    query = db.query(OutboxEvent).filter(OutboxEvent.delivered_at.is_(None))
    if topic:
        query = query.filter(OutboxEvent.topic == topic)
    query = query.filter((OutboxEvent.due_at.is_(None)) | (OutboxEvent.due_at <= now))
    return query.order_by(OutboxEvent.id.asc()).limit(limit).all()


def mark_delivered(db: Session, event: OutboxEvent) -> None:
    event.delivered_at = utcnow()
    event.attempt_count = (event.attempt_count or 0) + 1
    db.commit()


def mark_failed(db: Session, event: OutboxEvent, error: str) -> None:
    event.attempt_count = (event.attempt_count or 0) + 1
    event.last_error = error[:500]
    db.commit()
    logger.warning("outbox_delivery_failed id=%s attempts=%s err=%s", event.id, event.attempt_count, error)
