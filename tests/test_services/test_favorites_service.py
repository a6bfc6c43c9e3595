"""Unit tests for tvtracker_recommendation_service.services.favorites_service."""
import uuid

import pytest

from tvtracker_recommendation_service.errors import InvalidIdentifier, ShowNotFound
from tvtracker_recommendation_service.services.favorites_service import FavoritesService


@pytest.fixture
def service(test_session_factory):
    return FavoritesService(session_factory=test_session_factory)


class TestFavoritesService:
    """Tests for FavoritesService."""

    def test_add_favorite_created(self, service, seeded_catalog):
        """Test a new favorite reports created."""
        # Act
        created = service.add_favorite(
            str(seeded_catalog.user_ids["bob"]), str(seeded_catalog.show_ids["C"])
        )

        # Assert
        assert created is True
        assert service.get_favorite_show_ids(seeded_catalog.user_ids["bob"]) == [
            str(seeded_catalog.show_ids["C"])
        ]

    def test_add_favorite_existing(self, service, seeded_catalog):
        created = service.add_favorite(seeded_catalog.user_ids["alice"], seeded_catalog.show_ids["A"])

        assert created is False

    def test_add_favorite_unknown_show(self, service, seeded_catalog):
        """Test favoriting a missing show."""
        with pytest.raises(ShowNotFound):
            service.add_favorite(seeded_catalog.user_ids["alice"], uuid.uuid4())

    def test_add_favorite_invalid_ids(self, service):
        """Test malformed IDs name the offending field."""
        with pytest.raises(InvalidIdentifier, match="userId"):
            service.add_favorite("bad", str(uuid.uuid4()))

        with pytest.raises(InvalidIdentifier, match="tvShowId"):
            service.add_favorite(str(uuid.uuid4()), "bad")

    def test_remove_favorite(self, service, seeded_catalog):
        """Test remove is idempotent."""
        # Arrange
        alice = seeded_catalog.user_ids["alice"]

        # Act
        first = service.remove_favorite(alice, seeded_catalog.show_ids["A"])
        second = service.remove_favorite(alice, seeded_catalog.show_ids["A"])

        # Assert
        assert first is True
        assert second is False
        assert service.get_favorite_show_ids(alice) == [str(seeded_catalog.show_ids["B"])]

    def test_get_favorite_show_ids_returns_strings(self, service, seeded_catalog):
        result = service.get_favorite_show_ids(seeded_catalog.user_ids["alice"])

        assert sorted(result) == sorted(
            [str(seeded_catalog.show_ids["A"]), str(seeded_catalog.show_ids["B"])]
        )
