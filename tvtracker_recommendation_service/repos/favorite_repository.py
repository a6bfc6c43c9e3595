"""Repository for managing user favorites."""

import logging
import uuid
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from tvtracker_recommendation_service.models import Favorite

logger = logging.getLogger(__name__)


class FavoriteRepository:
    """
    Repository for managing user favorites.
    """

    def __init__(self, db: Session):
        self.db = db

    def exists(self, user_id: uuid.UUID, show_id: uuid.UUID) -> bool:
        """Check whether the user already favorited the show."""
        return (
            self.db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.tv_show_id == show_id)
            .first()
        ) is not None

    def add_favorite(self, user_id: uuid.UUID, show_id: uuid.UUID) -> bool:
        """
        Add a show to a user's favorites.

        Args:
            user_id: User ID
            show_id: Show ID

        Returns:
            True if created, False if it was already a favorite
        """
        if self.exists(user_id, show_id):
            return False

        self.db.add(Favorite(user_id=user_id, tv_show_id=show_id, created_at=datetime.now(UTC)))
        self.db.commit()

        logger.info(f"User {user_id} favorited show {show_id}")
        return True

    def remove_favorite(self, user_id: uuid.UUID, show_id: uuid.UUID) -> bool:
        """
        Remove a show from a user's favorites.

        Returns:
            True if deleted, False if not found
        """
        count = (
            self.db.query(Favorite)
            .filter(Favorite.user_id == user_id, Favorite.tv_show_id == show_id)
            .delete()
        )
        self.db.commit()

        return count > 0

    # noinspection PyTypeChecker
    def get_show_ids(self, user_id: uuid.UUID) -> list[uuid.UUID]:
        """Get IDs of all shows favorited by a user, oldest first."""
        result = (
            self.db.query(Favorite.tv_show_id)
            .filter(Favorite.user_id == user_id)
            .order_by(Favorite.created_at)
            .all()
        )
        return [row[0] for row in result]
