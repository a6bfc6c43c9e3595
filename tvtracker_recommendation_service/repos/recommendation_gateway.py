"""Data gateway used by the recommendation pipeline."""
import uuid
from typing import Dict, Iterable, List, Set, Tuple

from sqlalchemy.orm import Session

from tvtracker_recommendation_service.engine.ranker import DEFAULT_CANDIDATE_LIMIT, order_candidates
from tvtracker_recommendation_service.models import User
from tvtracker_recommendation_service.repos.favorite_repository import FavoriteRepository
from tvtracker_recommendation_service.repos.show_repository import ShowRepository
from tvtracker_recommendation_service.repos.user_repository import UserRepository


class RecommendationGateway:
    """
    Read-only queries the recommendation pipeline needs, over one session.
    """

    def __init__(self, db: Session):
        self.db = db
        self.users = UserRepository(db)
        self.favorites = FavoriteRepository(db)
        self.shows = ShowRepository(db)

    def user_by_id(self, user_id: uuid.UUID) -> User | None:
        return self.users.get_user(user_id)

    def favorited_show_ids(self, user_id: uuid.UUID) -> Set[uuid.UUID]:
        return set(self.favorites.get_show_ids(user_id))

    def genre_ids_for_shows(self, show_ids: Iterable[uuid.UUID]) -> Set[uuid.UUID]:
        return self.shows.get_genre_ids(show_ids)

    def candidate_overlap(
            self,
            genre_ids: Iterable[uuid.UUID],
            exclude_show_ids: Iterable[uuid.UUID],
            limit: int = DEFAULT_CANDIDATE_LIMIT
    ) -> List[Tuple[uuid.UUID, int]]:
        """
        Top overlapping candidates, most relevant first.

        Counting happens in SQL; ordering is done in Python so that titles
        compare exactly as stored, whatever the database collation.
        """
        rows = self.shows.get_overlap_counts(genre_ids, exclude_show_ids)
        counts = {show_id: count for show_id, _, count in rows}
        titles = {show_id: title for show_id, title, _ in rows}
        return order_candidates(counts, titles, limit)

    def hydrate_shows(self, show_ids: Iterable[uuid.UUID]) -> List[Dict]:
        return self.shows.hydrate_shows(show_ids)
