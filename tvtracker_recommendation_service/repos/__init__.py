"""Repository classes"""

from tvtracker_recommendation_service.repos.email_queue_repository import EmailQueueRepository
from tvtracker_recommendation_service.repos.favorite_repository import FavoriteRepository
from tvtracker_recommendation_service.repos.recommendation_gateway import RecommendationGateway
from tvtracker_recommendation_service.repos.show_repository import ShowRepository
from tvtracker_recommendation_service.repos.user_repository import UserRepository

__all__ = [
    "EmailQueueRepository",
    "FavoriteRepository",
    "RecommendationGateway",
    "ShowRepository",
    "UserRepository",
]
