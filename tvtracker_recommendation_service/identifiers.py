"""Identifier parsing helpers"""
import uuid

from tvtracker_recommendation_service.errors import InvalidIdentifier


def parse_uuid(value, name: str = "id") -> uuid.UUID:
    """
    Parse a UUID from a route parameter or message field.

    Raises:
        InvalidIdentifier: if value is missing or not a valid UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdentifier(f"{name} must be a valid UUID")
