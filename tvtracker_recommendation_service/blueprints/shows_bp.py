"""List the TV show catalog."""
import azure.functions as func
import logging

from tvtracker_recommendation_service.blueprints.responses import internal_error_response, json_response
from tvtracker_recommendation_service.services import CatalogService

bp = func.Blueprint()

catalog_service = CatalogService()

logger = logging.getLogger(__name__)


# noinspection PyUnusedLocal
@bp.route(route="tv-shows", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def list_tv_shows(req: func.HttpRequest) -> func.HttpResponse:
    """All shows with their genres."""
    try:
        return json_response(catalog_service.list_shows())

    except Exception as e:
        logger.error(f"Error listing shows: {str(e)}", exc_info=True)
        return internal_error_response()
