"""JSON response helpers shared by the HTTP blueprints."""
import json

import azure.functions as func

from tvtracker_recommendation_service.errors import RecommendationError


def json_response(body, status_code: int = 200) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(body, default=str),  # default=str handles UUID and datetime
        status_code=status_code,
        mimetype="application/json"
    )


def error_response(error: RecommendationError) -> func.HttpResponse:
    """Map a structured error to its HTTP status."""
    return json_response(error.to_dict(), status_code=error.status_code)


def internal_error_response() -> func.HttpResponse:
    return json_response({"error": "Internal server error"}, status_code=500)
