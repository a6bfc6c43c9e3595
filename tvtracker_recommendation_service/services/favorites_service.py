"""Service for managing a user's favorite shows."""
from typing import List
import logging

from tvtracker_recommendation_service.errors import ShowNotFound
from tvtracker_recommendation_service.identifiers import parse_uuid
from tvtracker_recommendation_service.models.database import SessionLocal
from tvtracker_recommendation_service.repos import FavoriteRepository, ShowRepository

logger = logging.getLogger(__name__)


class FavoritesService:
    """Add, remove and list favorites."""

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or SessionLocal

    def add_favorite(self, user_id, show_id) -> bool:
        """
        Favorite a show for a user.

        Args:
            user_id: User UUID
            show_id: Show UUID

        Returns:
            True if a favorite was created, False if it already existed

        Raises:
            InvalidIdentifier: if either ID is not a UUID
            ShowNotFound: if the show does not exist
        """
        user_id = parse_uuid(user_id, "userId")
        show_id = parse_uuid(show_id, "tvShowId")

        db = self.session_factory()
        try:
            if not ShowRepository(db).exists(show_id):
                raise ShowNotFound(f"TV show {show_id} not found", user_id=user_id)

            return FavoriteRepository(db).add_favorite(user_id, show_id)
        finally:
            db.close()

    def remove_favorite(self, user_id, show_id) -> bool:
        """Remove a favorite. Returns False if there was nothing to remove."""
        user_id = parse_uuid(user_id, "userId")
        show_id = parse_uuid(show_id, "tvShowId")

        db = self.session_factory()
        try:
            return FavoriteRepository(db).remove_favorite(user_id, show_id)
        finally:
            db.close()

    def get_favorite_show_ids(self, user_id) -> List[str]:
        """Get IDs of a user's favorite shows as strings."""
        user_id = parse_uuid(user_id, "userId")

        db = self.session_factory()
        try:
            return [str(show_id) for show_id in FavoriteRepository(db).get_show_ids(user_id)]
        finally:
            db.close()
