"""Error types raised by the recommendation pipeline and its collaborators."""


class RecommendationError(Exception):
    """Base exception for failures surfaced to callers as structured errors."""

    reason = "RecommendationError"
    status_code = 400

    def __init__(self, message: str, user_id=None, stage: str | None = None):
        super().__init__(message)
        self.user_id = user_id
        self.stage = stage

    def to_dict(self) -> dict:
        return {
            "error": self.reason,
            "message": str(self),
            "stage": self.stage,
        }


class InvalidIdentifier(RecommendationError):
    """Raised when an identifier is not a valid UUID."""

    reason = "InvalidIdentifier"
    status_code = 400


class UserNotFound(RecommendationError):
    """Raised when the user does not exist or has been deleted."""

    reason = "UserNotFound"
    status_code = 404


class ShowNotFound(RecommendationError):
    """Raised when a TV show does not exist."""

    reason = "ShowNotFound"
    status_code = 404


class EmailNotFound(RecommendationError):
    """Raised when a stored recommendation email does not exist."""

    reason = "EmailNotFound"
    status_code = 404


class NoFavorites(RecommendationError):
    """Raised when the user has not favorited any show."""

    reason = "NoFavorites"
    status_code = 422


class NoGenreSignal(RecommendationError):
    """Raised when none of the user's favorited shows carries a genre."""

    reason = "NoGenreSignal"
    status_code = 422


class NoCandidates(RecommendationError):
    """Raised when no unfavorited show shares a genre with the user's favorites."""

    reason = "NoCandidates"
    status_code = 422


class DeliveryFailed(RecommendationError):
    """
    Raised when the notifier could not deliver a computed recommendation email.

    The email is stored, so it can be resent without recomputation.
    """

    reason = "DeliveryFailed"
    status_code = 502

    def __init__(
            self,
            message: str,
            user_id=None,
            stage: str | None = None,
            candidate_count: int | None = None,
            email_id=None
    ):
        super().__init__(message, user_id=user_id, stage=stage)
        self.candidate_count = candidate_count
        self.email_id = email_id

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["email_id"] = str(self.email_id) if self.email_id is not None else None
        return data


class NotificationError(Exception):
    """Raised by a notifier when the email provider rejects or fails a delivery."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
