"""Resolve a user's genre affinity from their favorited shows."""
import logging
from typing import Set, Tuple

from tvtracker_recommendation_service.errors import NoFavorites, NoGenreSignal

logger = logging.getLogger(__name__)


def resolve_affinity(gateway, user_id) -> Tuple[Set, Set]:
    """
    Determine the genres implied by a user's favorites.

    Args:
        gateway: Data gateway exposing favorited_show_ids and genre_ids_for_shows
        user_id: User identifier

    Returns:
        (favorite_show_ids, affinity_genre_ids) tuple, both non-empty

    Raises:
        NoFavorites: if the user has no favorites
        NoGenreSignal: if none of the favorited shows carries a genre
    """
    favorite_ids = set(gateway.favorited_show_ids(user_id))
    if not favorite_ids:
        raise NoFavorites(f"User {user_id} has no favorite shows", user_id=user_id)

    affinity = set(gateway.genre_ids_for_shows(favorite_ids))
    if not affinity:
        raise NoGenreSignal(
            f"None of the {len(favorite_ids)} favorite shows of user {user_id} has genres",
            user_id=user_id
        )

    logger.info(f"User {user_id}: {len(favorite_ids)} favorites, {len(affinity)} affinity genres")
    return favorite_ids, affinity
