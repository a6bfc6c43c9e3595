"""Manage user favorites and trigger recommendations when one is added."""
import azure.functions as func
import logging
import json

from tvtracker_recommendation_service.blueprints.responses import (
    error_response,
    internal_error_response,
    json_response,
)
from tvtracker_recommendation_service.config import get_recommendation_queue_name
from tvtracker_recommendation_service.errors import RecommendationError
from tvtracker_recommendation_service.services import FavoritesService

bp = func.Blueprint()

favorites_service = FavoritesService()

logger = logging.getLogger(__name__)


@bp.route(route="users/{user_id}/favorites/{show_id}", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
@bp.queue_output(arg_name="msg", queue_name=get_recommendation_queue_name(), connection="AzureWebJobsStorage")
def add_favorite(req: func.HttpRequest, msg: func.Out[str]) -> func.HttpResponse:
    """
    Favorite a show.

    A newly created favorite enqueues a recommendation request; the
    response never waits for the email.
    """
    try:
        user_id = req.route_params.get('user_id')
        show_id = req.route_params.get('show_id')

        created = favorites_service.add_favorite(user_id, show_id)
        if not created:
            return func.HttpResponse(status_code=204)

        msg.set(json.dumps({"user_id": str(user_id)}))

        return json_response({"tvShowId": str(show_id)}, status_code=201)

    except RecommendationError as e:
        return error_response(e)

    except Exception as e:
        logger.error(f"Error adding favorite: {str(e)}", exc_info=True)
        return internal_error_response()


@bp.route(route="users/{user_id}/favorites-ids", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_favorite_ids(req: func.HttpRequest) -> func.HttpResponse:
    """List IDs of a user's favorite shows."""
    try:
        ids = favorites_service.get_favorite_show_ids(req.route_params.get('user_id'))
        return json_response(ids)

    except RecommendationError as e:
        return error_response(e)

    except Exception as e:
        logger.error(f"Error listing favorites: {str(e)}", exc_info=True)
        return internal_error_response()


@bp.route(route="users/{user_id}/favorites/{show_id}", methods=["DELETE"], auth_level=func.AuthLevel.ANONYMOUS)
def remove_favorite(req: func.HttpRequest) -> func.HttpResponse:
    """Remove a favorite (idempotent)."""
    try:
        favorites_service.remove_favorite(
            req.route_params.get('user_id'),
            req.route_params.get('show_id')
        )
        return func.HttpResponse(status_code=204)

    except RecommendationError as e:
        return error_response(e)

    except Exception as e:
        logger.error(f"Error removing favorite: {str(e)}", exc_info=True)
        return internal_error_response()
