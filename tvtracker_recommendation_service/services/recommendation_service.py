"""Service that generates genre-affinity recommendations and emails them."""
from contextlib import contextmanager
from enum import Enum
from typing import Dict, Optional
import logging

from tvtracker_recommendation_service.config import (
    get_candidate_limit,
    get_display_limit,
    get_email_subject,
    get_suppression_seconds,
)
from tvtracker_recommendation_service.engine import (
    format_recommendations,
    order_ranked_shows,
    rank_candidates,
    resolve_affinity,
)
from tvtracker_recommendation_service.errors import (
    DeliveryFailed,
    EmailNotFound,
    NotificationError,
    RecommendationError,
    UserNotFound,
)
from tvtracker_recommendation_service.identifiers import parse_uuid
from tvtracker_recommendation_service.models.database import SessionLocal
from tvtracker_recommendation_service.repos import EmailQueueRepository, RecommendationGateway
from tvtracker_recommendation_service.services.notification_service import SendGridNotifier

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    RESOLVE_USER = "ResolveUser"
    RESOLVE_AFFINITY = "ResolveAffinity"
    RANK_CANDIDATES = "RankCandidates"
    HYDRATE_SHOWS = "HydrateShows"
    FORMAT = "Format"
    DELIVER = "Deliver"
    DONE = "Done"


class RecommendationService:
    """
    Generates recommendations from a user's favorites and emails them.

    The pipeline runs ResolveUser -> ResolveAffinity -> RankCandidates ->
    HydrateShows -> Format -> Deliver -> Done. A failing stage raises a
    RecommendationError tagged with that stage. Nothing is retried inside
    the pipeline.
    """

    def __init__(
            self,
            session_factory=None,
            notifier=None,
            candidate_limit: Optional[int] = None,
            display_limit: Optional[int] = None,
            subject: Optional[str] = None,
            suppression_seconds: Optional[int] = None
    ):
        """
        Initialize the recommendation service.

        Args:
            session_factory: Callable returning a SQLAlchemy session (default: SessionLocal)
            notifier: Object with a send(...) method (default: SendGridNotifier, created lazily)
            candidate_limit: Max overlapping candidates to hydrate
            display_limit: Max shows listed in the email
            subject: Email subject line
            suppression_seconds: Per-user window for ignoring repeated favorite triggers
        """
        self.session_factory = session_factory or SessionLocal
        self._notifier = notifier
        self.candidate_limit = candidate_limit if candidate_limit is not None else get_candidate_limit()
        self.display_limit = display_limit if display_limit is not None else get_display_limit()
        self.subject = subject or get_email_subject()
        self.suppression_seconds = (
            suppression_seconds if suppression_seconds is not None else get_suppression_seconds()
        )

        if self.candidate_limit < 1:
            raise ValueError(f"candidate_limit must be at least 1, got {self.candidate_limit}")
        if self.display_limit < 1:
            raise ValueError(f"display_limit must be at least 1, got {self.display_limit}")

    @property
    def notifier(self):
        """Notifier used for delivery, created on first use."""
        if self._notifier is None:
            self._notifier = SendGridNotifier()
        return self._notifier

    @contextmanager
    def _stage(self, stage: PipelineStage, user_id):
        logger.debug(f"User {user_id}: entering {stage.value}")
        try:
            yield
        except RecommendationError as e:
            if e.stage is None:
                e.stage = stage.value
            if e.user_id is None:
                e.user_id = user_id
            if not isinstance(e, DeliveryFailed):
                logger.warning(f"Recommendation pipeline for user {user_id} failed at {e.stage}: {e.reason}")
            raise

    def generate_and_send_recommendations(self, user_id) -> Dict:
        """
        Compute recommendations for a user and email them.

        Args:
            user_id: User UUID (string or UUID)

        Returns:
            Dict with sent_to (recipient address) and count (candidates ranked,
            at most candidate_limit)

        Raises:
            InvalidIdentifier, UserNotFound, NoFavorites, NoGenreSignal,
            NoCandidates, DeliveryFailed
        """
        user_id = parse_uuid(user_id, "user_id")
        # Resolve the notifier up front so a misconfiguration never leaves a pending email behind
        notifier = self.notifier

        db = self.session_factory()
        try:
            gateway = RecommendationGateway(db)

            with self._stage(PipelineStage.RESOLVE_USER, user_id):
                user = gateway.user_by_id(user_id)
                if user is None:
                    raise UserNotFound(f"User {user_id} not found")

            with self._stage(PipelineStage.RESOLVE_AFFINITY, user_id):
                favorite_ids, affinity = resolve_affinity(gateway, user_id)

            with self._stage(PipelineStage.RANK_CANDIDATES, user_id):
                ranked_ids = rank_candidates(
                    gateway, affinity, favorite_ids, limit=self.candidate_limit, user_id=user_id
                )

            with self._stage(PipelineStage.HYDRATE_SHOWS, user_id):
                overlaps = dict(ranked_ids)
                shows = gateway.hydrate_shows([show_id for show_id, _ in ranked_ids])
                ranked = order_ranked_shows(shows, overlaps)
                total = len(ranked)

            with self._stage(PipelineStage.FORMAT, user_id):
                plain_body, html_body = format_recommendations(
                    ranked, total=total, display_limit=self.display_limit
                )

            with self._stage(PipelineStage.DELIVER, user_id):
                email_repo = EmailQueueRepository(db)
                email = email_repo.create_email({
                    "user_id": user_id,
                    "to_email": user.email,
                    "to_name": user.display_name,
                    "subject": self.subject,
                    "body": plain_body,
                    "html_body": html_body,
                    "candidate_count": total,
                })
                self._deliver(notifier, email_repo, email, user_id=user_id, candidate_count=total)

            logger.info(f"✓ {PipelineStage.DONE.value}: sent {total} recommendations to {user.email}")
            return {"sent_to": user.email, "count": total}

        finally:
            db.close()

    def _deliver(self, notifier, email_repo: EmailQueueRepository, email, user_id=None, candidate_count=None):
        """Send a stored email and record the outcome."""
        try:
            notifier.send(email.to_email, email.to_name, email.subject, email.body, email.html_body)
        except NotificationError as e:
            email_repo.mark_failed(email, str(e))
            logger.error(
                f"Delivery failed for user {user_id} "
                f"({candidate_count} candidates, email {email.id}): {e}"
            )
            raise DeliveryFailed(
                f"Could not deliver recommendations to {email.to_email}",
                user_id=user_id,
                stage=PipelineStage.DELIVER.value,
                candidate_count=candidate_count,
                email_id=email.id
            ) from e

        email_repo.mark_sent(email)

    def resend_email(self, email_id) -> Dict:
        """
        Resend a stored recommendation email without recomputing it.

        Args:
            email_id: EmailQueue UUID

        Returns:
            Dict with sent_to and email_id

        Raises:
            InvalidIdentifier, EmailNotFound, DeliveryFailed
        """
        email_id = parse_uuid(email_id, "email_id")
        notifier = self.notifier

        db = self.session_factory()
        try:
            email_repo = EmailQueueRepository(db)
            email = email_repo.get_email(email_id)
            if email is None:
                raise EmailNotFound(f"Email {email_id} not found", stage=PipelineStage.DELIVER.value)

            logger.info(f"Resending email {email_id} to {email.to_email} (attempt {email.attempts + 1})")
            self._deliver(
                notifier, email_repo, email,
                user_id=email.user_id, candidate_count=email.candidate_count
            )
            return {"sent_to": email.to_email, "email_id": str(email.id)}

        finally:
            db.close()

    def resend_failed_emails(self, limit: int = 100) -> Dict:
        """
        Resend every failed email (oldest first).

        Returns:
            Dict with attempted, sent and failed counts
        """
        db = self.session_factory()
        try:
            failed_ids = [email.id for email in EmailQueueRepository(db).get_failed_emails(limit=limit)]
        finally:
            db.close()

        logger.info(f"Resending {len(failed_ids)} failed emails...")

        sent = 0
        for email_id in failed_ids:
            try:
                self.resend_email(email_id)
                sent += 1
            except DeliveryFailed:
                continue

        stats = {"attempted": len(failed_ids), "sent": sent, "failed": len(failed_ids) - sent}
        logger.info(f"✓ Resent {sent}/{len(failed_ids)} failed emails")
        return stats

    def is_suppressed(self, user_id) -> bool:
        """
        Check whether a recommendation email for this user was created recently.

        Args:
            user_id: User UUID (string or UUID)

        Returns:
            True if the user is inside the suppression window
        """
        user_id = parse_uuid(user_id, "user_id")
        if self.suppression_seconds <= 0:
            return False

        db = self.session_factory()
        try:
            return EmailQueueRepository(db).has_recent_email(user_id, self.suppression_seconds)
        finally:
            db.close()
