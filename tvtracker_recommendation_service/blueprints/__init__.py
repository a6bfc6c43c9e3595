"""Azure Functions blueprints"""

from tvtracker_recommendation_service.blueprints.favorites_bp import bp as favorites_bp
from tvtracker_recommendation_service.blueprints.recommendations_bp import bp as recommendations_bp
from tvtracker_recommendation_service.blueprints.shows_bp import bp as shows_bp

__all__ = ["favorites_bp", "recommendations_bp", "shows_bp"]
