"""Repository for querying the TV show catalog."""

import uuid
from typing import Dict, Iterable, List, Set, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from tvtracker_recommendation_service.models import TvShow, tv_show_genres


def show_to_dict(show: TvShow) -> Dict:
    """Flatten a TvShow and its genres into a plain dict."""
    return {
        'show_id': show.id,
        'title': show.title,
        'description': show.description,
        'type': show.type,
        'release_year': show.release_year,
        'genres': [{'id': genre.id, 'name': genre.name} for genre in show.genres],
    }


class ShowRepository:
    """
    Repository for querying TV shows and their genres.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_show(self, show_id: uuid.UUID) -> TvShow | None:
        """Get show by ID."""
        return self.db.query(TvShow).filter(TvShow.id == show_id).first()

    def exists(self, show_id: uuid.UUID) -> bool:
        return self.db.query(TvShow.id).filter(TvShow.id == show_id).first() is not None

    # noinspection PyTypeChecker
    def list_shows(self) -> List[Dict]:
        """Get all shows with their genres, ordered by title."""
        shows = self.db.query(TvShow).order_by(TvShow.title).all()
        return [show_to_dict(show) for show in shows]

    def get_genre_ids(self, show_ids: Iterable[uuid.UUID]) -> Set[uuid.UUID]:
        """Get distinct genre IDs attached to any of the given shows."""
        show_ids = list(show_ids)
        if not show_ids:
            return set()

        result = (
            self.db.query(tv_show_genres.c.genre_id)
            .filter(tv_show_genres.c.tv_show_id.in_(show_ids))
            .distinct()
            .all()
        )
        return {row[0] for row in result}

    def get_overlap_counts(
            self,
            genre_ids: Iterable[uuid.UUID],
            exclude_show_ids: Iterable[uuid.UUID]
    ) -> List[Tuple[uuid.UUID, str, int]]:
        """
        Count, per show, the associations whose genre is in genre_ids.

        Args:
            genre_ids: Genre IDs to match
            exclude_show_ids: Show IDs to leave out

        Returns:
            List of (show_id, title, overlap) tuples, unordered by relevance
        """
        genre_ids = list(genre_ids)
        exclude_show_ids = list(exclude_show_ids)
        if not genre_ids:
            return []

        query = (
            self.db.query(
                tv_show_genres.c.tv_show_id,
                TvShow.title,
                func.count(tv_show_genres.c.genre_id)
            )
            .select_from(tv_show_genres)
            .join(TvShow, TvShow.id == tv_show_genres.c.tv_show_id)
            .filter(tv_show_genres.c.genre_id.in_(genre_ids))
        )
        if exclude_show_ids:
            query = query.filter(tv_show_genres.c.tv_show_id.notin_(exclude_show_ids))

        result = (
            query
            .group_by(tv_show_genres.c.tv_show_id, TvShow.title)
            .order_by(tv_show_genres.c.tv_show_id)
            .all()
        )
        return [(row[0], row[1], int(row[2])) for row in result]

    def hydrate_shows(self, show_ids: Iterable[uuid.UUID]) -> List[Dict]:
        """
        Fetch full records for shows, in the order the IDs were given.

        Unknown IDs are skipped.
        """
        show_ids = list(show_ids)
        if not show_ids:
            return []

        shows = self.db.query(TvShow).filter(TvShow.id.in_(show_ids)).all()
        by_id = {show.id: show for show in shows}

        return [show_to_dict(by_id[show_id]) for show_id in show_ids if show_id in by_id]
