"""Repository for reading application users."""
import uuid

from sqlalchemy.orm import Session

from tvtracker_recommendation_service.models import User


class UserRepository:
    """
    Read-only access to users.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: uuid.UUID) -> User | None:
        """Get an active (not soft-deleted) user by ID."""
        return (
            self.db.query(User)
            .filter(User.id == user_id, User.deleted_at.is_(None))
            .first()
        )
