"""Repository for stored recommendation emails."""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from tvtracker_recommendation_service.models import EmailQueue, EmailStatus

logger = logging.getLogger(__name__)


class EmailQueueRepository:
    """
    Repository for recommendation emails and their delivery state.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_email(self, email_data: dict) -> EmailQueue:
        """
        Store a rendered email in pending state.

        Args:
            email_data: Dict with user_id, to_email, to_name, subject, body,
                html_body and candidate_count

        Returns:
            EmailQueue object
        """
        now = datetime.now(UTC)
        email = EmailQueue(
            user_id=email_data.get("user_id"),
            to_email=email_data["to_email"],
            to_name=email_data.get("to_name"),
            subject=email_data["subject"],
            body=email_data["body"],
            html_body=email_data.get("html_body"),
            candidate_count=email_data.get("candidate_count"),
            status=EmailStatus.PENDING.value,
            attempts=0,
            scheduled_at=now,
            created_at=now,
        )
        self.db.add(email)
        self.db.commit()
        self.db.refresh(email)

        return email

    def get_email(self, email_id: uuid.UUID) -> EmailQueue | None:
        """Get stored email by ID."""
        return self.db.query(EmailQueue).filter(EmailQueue.id == email_id).first()

    def mark_sent(self, email: EmailQueue) -> EmailQueue:
        """Record a successful delivery attempt."""
        email.status = EmailStatus.SENT.value  # type: ignore[assignment]
        email.attempts = (email.attempts or 0) + 1  # type: ignore[assignment]
        email.sent_at = datetime.now(UTC)  # type: ignore[assignment]
        email.last_error = None  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(email)

        return email

    def mark_failed(self, email: EmailQueue, error: str) -> EmailQueue:
        """Record a failed delivery attempt."""
        email.status = EmailStatus.FAILED.value  # type: ignore[assignment]
        email.attempts = (email.attempts or 0) + 1  # type: ignore[assignment]
        email.last_error = error  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(email)

        return email

    # noinspection PyTypeChecker
    def get_failed_emails(self, limit: int = 100) -> list[EmailQueue]:
        """Get failed emails, oldest first."""
        return (
            self.db.query(EmailQueue)
            .filter(EmailQueue.status == EmailStatus.FAILED.value)
            .order_by(EmailQueue.created_at)
            .limit(limit)
            .all()
        )

    def has_recent_email(self, user_id: uuid.UUID, window_seconds: int, now: Optional[datetime] = None) -> bool:
        """
        Check whether an email for this user was created within the window.

        Args:
            user_id: User ID
            window_seconds: Window length in seconds
            now: Reference time (defaults to current UTC time)

        Returns:
            True if a recent email exists
        """
        if window_seconds <= 0:
            return False

        cutoff = (now or datetime.now(UTC)) - timedelta(seconds=window_seconds)
        return (
            self.db.query(EmailQueue.id)
            .filter(EmailQueue.user_id == user_id, EmailQueue.created_at >= cutoff)
            .first()
        ) is not None
