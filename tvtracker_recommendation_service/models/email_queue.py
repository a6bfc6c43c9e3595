"""Stored recommendation emails and their delivery state."""
import enum
import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Index, Integer, SmallInteger, String, Text, Uuid

from tvtracker_recommendation_service.models.base import Base


class EmailStatus(enum.IntEnum):
    PENDING = 0
    SENT = 1
    FAILED = 2


class EmailQueue(Base):
    """One recommendation email per row.

    Keeps both rendered bodies so a failed delivery can be resent
    without recomputing the recommendations.
    """
    __tablename__ = "email_queue"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=True)

    to_email = Column(String(255), nullable=False)
    to_name = Column(String(255), nullable=True)
    subject = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    html_body = Column(Text, nullable=True)

    status = Column(SmallInteger, nullable=False, default=EmailStatus.PENDING.value)
    attempts = Column(Integer, nullable=False, default=0)
    candidate_count = Column(Integer, nullable=True)
    last_error = Column(Text, nullable=True)

    scheduled_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("idx_email_queue_user_created", "user_id", "created_at"),
        Index("idx_email_queue_status", "status"),
    )

    def __repr__(self):
        return f"<EmailQueue(id={self.id}, to_email='{self.to_email}', status={self.status})>"
