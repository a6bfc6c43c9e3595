"""Read-only access to the TV show catalog."""
from typing import Dict, List

from tvtracker_recommendation_service.models.database import SessionLocal
from tvtracker_recommendation_service.repos import ShowRepository


class CatalogService:
    """List TV shows with their genres."""

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or SessionLocal

    def list_shows(self) -> List[Dict]:
        db = self.session_factory()
        try:
            return ShowRepository(db).list_shows()
        finally:
            db.close()
