from sqlalchemy import Column, DateTime, Integer, String, Text

from .base import BaseModel


class OutboxEvent(BaseModel):
    """Event waiting for delivery by an external notification worker."""

    __tablename__ = "outbox_events"

    id = Column(Integer, primary_key=True, index=True)
    topic = Column(String, nullable=False, index=True)
    payload_json = Column(Text, nullable=False)
    delivered_at = Column(DateTime, nullable=True)
    attempt_count = Column(Integer, nullable=False, default=0)
    last_error = Column(String, nullable=True)
    due_at = Column(DateTime, nullable=True)
