"""SQLAlchemy models"""

from tvtracker_recommendation_service.models.base import Base
from tvtracker_recommendation_service.models.email_queue import EmailQueue, EmailStatus
from tvtracker_recommendation_service.models.favorite import Favorite
from tvtracker_recommendation_service.models.genre import Genre
from tvtracker_recommendation_service.models.tv_show import TvShow, tv_show_genres
from tvtracker_recommendation_service.models.user import User

__all__ = [
    "Base",
    "EmailQueue",
    "EmailStatus",
    "Favorite",
    "Genre",
    "TvShow",
    "User",
    "tv_show_genres",
]
