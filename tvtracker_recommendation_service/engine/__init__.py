"""Genre-affinity recommendation computation"""

from tvtracker_recommendation_service.engine.affinity import resolve_affinity
from tvtracker_recommendation_service.engine.formatter import format_recommendations
from tvtracker_recommendation_service.engine.ranker import (
    count_overlap,
    order_candidates,
    order_ranked_shows,
    rank_candidates,
)

__all__ = [
    "count_overlap",
    "format_recommendations",
    "order_candidates",
    "order_ranked_shows",
    "rank_candidates",
    "resolve_affinity",
]
