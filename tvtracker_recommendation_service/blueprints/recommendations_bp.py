"""Generate and email recommendations for a user."""
import azure.functions as func
import logging
import json

from tvtracker_recommendation_service.blueprints.responses import (
    error_response,
    internal_error_response,
    json_response,
)
from tvtracker_recommendation_service.config import get_recommendation_queue_name
from tvtracker_recommendation_service.errors import DeliveryFailed, RecommendationError
from tvtracker_recommendation_service.services import RecommendationService

# Initialize blueprint
bp = func.Blueprint()

# Initialize service (singleton pattern)
recommendation_service = RecommendationService()

logger = logging.getLogger(__name__)


@bp.route(route="users/{user_id}/recommendations", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def send_user_recommendations(req: func.HttpRequest) -> func.HttpResponse:
    """
    Compute recommendations for a user and email them.

    Returns:
        200 {"sent_to": ..., "count": ...}
        400/404/422 for input or state problems, 502 if delivery failed
    """
    try:
        user_id = req.route_params.get('user_id')

        if not user_id:
            return json_response({"error": "user_id is required"}, status_code=400)

        result = recommendation_service.generate_and_send_recommendations(user_id)
        return json_response(result, status_code=200)

    except RecommendationError as e:
        return error_response(e)

    except Exception as e:
        logger.error(f"Error generating recommendations: {str(e)}", exc_info=True)
        return internal_error_response()


@bp.route(route="recommendations/emails/{email_id}/resend", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def resend_recommendation_email(req: func.HttpRequest) -> func.HttpResponse:
    """Resend a stored recommendation email without recomputing it."""
    try:
        email_id = req.route_params.get('email_id')

        if not email_id:
            return json_response({"error": "email_id is required"}, status_code=400)

        result = recommendation_service.resend_email(email_id)
        return json_response(result, status_code=200)

    except RecommendationError as e:
        return error_response(e)

    except Exception as e:
        logger.error(f"Error resending email: {str(e)}", exc_info=True)
        return internal_error_response()


@bp.queue_trigger(arg_name="msg", queue_name=get_recommendation_queue_name(), connection="AzureWebJobsStorage")
def process_recommendation_request(msg: func.QueueMessage) -> None:
    """
    Run the recommendation pipeline for a queued request (sent after a favorite is added).

    Pipeline errors are terminal and only logged. Anything unexpected is
    re-raised so the runtime retries it and eventually moves it to the poison queue.
    """
    try:
        payload = json.loads(msg.get_body().decode("utf-8"))
        user_id = payload["user_id"]
    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Discarding malformed recommendation request: {e}")
        return

    try:
        if recommendation_service.is_suppressed(user_id):
            logger.info(f"Skipping recommendations for user {user_id}: sent recently")
            return

        result = recommendation_service.generate_and_send_recommendations(user_id)
        logger.info(f"✓ Queued recommendations sent to {result['sent_to']} ({result['count']} shows)")

    except DeliveryFailed as e:
        logger.error(f"Recommendation email {e.email_id} for user {user_id} was not delivered; resend manually")

    except RecommendationError as e:
        logger.info(f"No recommendations sent for user {user_id}: {e.reason} ({e})")


# noinspection PyUnusedLocal
@bp.route(route="recommendations/health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """Health check endpoint."""
    return json_response({
        "status": "healthy",
        "service": "tvtracker-recommendation-service",
        "version": "1.0.0"
    })
