"""Service classes"""

from .catalog_service import CatalogService
from .favorites_service import FavoritesService
from .notification_service import SendGridNotifier
from .recommendation_service import PipelineStage, RecommendationService

__all__ = [
    "CatalogService",
    "FavoritesService",
    "PipelineStage",
    "RecommendationService",
    "SendGridNotifier",
]
