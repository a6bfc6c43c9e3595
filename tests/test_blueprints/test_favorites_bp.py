"""Integration tests for favorites blueprint Azure Functions."""
import json
import uuid
from unittest.mock import Mock, patch

import azure.functions as func

from tvtracker_recommendation_service.blueprints.favorites_bp import (
    add_favorite,
    get_favorite_ids,
    remove_favorite,
)
from tvtracker_recommendation_service.errors import InvalidIdentifier, ShowNotFound

SERVICE_PATH = 'tvtracker_recommendation_service.blueprints.favorites_bp.favorites_service'


def _request(**route_params):
    mock_req = Mock(spec=func.HttpRequest)
    mock_req.route_params = route_params
    mock_req.params = {}
    return mock_req


class TestAddFavorite:
    """Tests for add_favorite function."""

    @patch(SERVICE_PATH)
    def test_created_enqueues_recommendation_request(self, mock_service):
        """Test a new favorite returns 201 and queues the user."""
        # Arrange
        user_id, show_id = str(uuid.uuid4()), str(uuid.uuid4())
        mock_service.add_favorite.return_value = True
        msg = Mock()

        # Act
        response = add_favorite(_request(user_id=user_id, show_id=show_id), msg)

        # Assert
        assert response.status_code == 201
        assert json.loads(response.get_body()) == {"tvShowId": show_id}
        msg.set.assert_called_once()
        assert json.loads(msg.set.call_args[0][0]) == {"user_id": user_id}

    @patch(SERVICE_PATH)
    def test_existing_favorite_returns_204_without_trigger(self, mock_service):
        """Test re-favoriting is a no-op that sends nothing."""
        # Arrange
        mock_service.add_favorite.return_value = False
        msg = Mock()

        # Act
        response = add_favorite(_request(user_id=str(uuid.uuid4()), show_id=str(uuid.uuid4())), msg)

        # Assert
        assert response.status_code == 204
        msg.set.assert_not_called()

    @patch(SERVICE_PATH)
    def test_invalid_id_returns_400(self, mock_service):
        # Arrange
        mock_service.add_favorite.side_effect = InvalidIdentifier("userId must be a valid UUID")
        msg = Mock()

        # Act
        response = add_favorite(_request(user_id="bad", show_id="bad"), msg)

        # Assert
        assert response.status_code == 400
        assert json.loads(response.get_body())["error"] == "InvalidIdentifier"
        msg.set.assert_not_called()

    @patch(SERVICE_PATH)
    def test_unknown_show_returns_404(self, mock_service):
        mock_service.add_favorite.side_effect = ShowNotFound("missing")

        response = add_favorite(_request(user_id=str(uuid.uuid4()), show_id=str(uuid.uuid4())), Mock())

        assert response.status_code == 404

    @patch(SERVICE_PATH)
    def test_unexpected_error_returns_500(self, mock_service):
        mock_service.add_favorite.side_effect = RuntimeError("db down")

        response = add_favorite(_request(user_id=str(uuid.uuid4()), show_id=str(uuid.uuid4())), Mock())

        assert response.status_code == 500


class TestGetFavoriteIds:
    """Tests for get_favorite_ids function."""

    @patch(SERVICE_PATH)
    def test_returns_ids(self, mock_service):
        # Arrange
        ids = [str(uuid.uuid4()), str(uuid.uuid4())]
        mock_service.get_favorite_show_ids.return_value = ids

        # Act
        response = get_favorite_ids(_request(user_id=str(uuid.uuid4())))

        # Assert
        assert response.status_code == 200
        assert json.loads(response.get_body()) == ids


class TestRemoveFavorite:
    """Tests for remove_favorite function."""

    @patch(SERVICE_PATH)
    def test_returns_204(self, mock_service):
        # Arrange
        user_id, show_id = str(uuid.uuid4()), str(uuid.uuid4())

        # Act
        response = remove_favorite(_request(user_id=user_id, show_id=show_id))

        # Assert
        assert response.status_code == 204
        mock_service.remove_favorite.assert_called_once_with(user_id, show_id)
