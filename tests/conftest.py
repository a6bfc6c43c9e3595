"""Shared test fixtures and configuration for pytest."""
import os

# Keep module-level engine creation off PostgreSQL during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import uuid
from types import SimpleNamespace
from typing import Dict, List
from unittest.mock import Mock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from tvtracker_recommendation_service.engine.ranker import count_overlap, order_candidates
from tvtracker_recommendation_service.models import Base, Favorite, Genre, TvShow, User


# ===== Database Fixtures =====

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database engine shared by every session in a test."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_session_factory(test_db_engine):
    """Session factory bound to the test engine (what services receive)."""
    return sessionmaker(bind=test_db_engine)


@pytest.fixture(scope="function")
def test_db_session(test_session_factory):
    """Create a database session for testing."""
    session = test_session_factory()
    yield session
    session.close()


# ===== Sample Data Fixtures =====

def _make_user(email: str, display_name: str | None = None, **kwargs) -> User:
    return User(
        id=uuid.uuid4(),
        email=email,
        display_name=display_name,
        password_hash="not-a-real-hash",
        **kwargs
    )


@pytest.fixture
def seeded_catalog(test_db_session) -> SimpleNamespace:
    """
    Users, genres, shows and favorites for the Drama/Crime scenario.

    alice favorites A (Drama, Crime) and B (Drama).
    C (Drama) and D (Crime, Drama) are candidates; E (Comedy) is not.
    bob has no favorites; carol only favorites a show without genres.
    """
    genres = {name: Genre(id=uuid.uuid4(), name=name) for name in ["Drama", "Crime", "Comedy"]}

    shows = {
        "A": TvShow(id=uuid.uuid4(), title="Show A", release_year=2008,
                    genres=[genres["Drama"], genres["Crime"]]),
        "B": TvShow(id=uuid.uuid4(), title="Show B", release_year=2010, genres=[genres["Drama"]]),
        "C": TvShow(id=uuid.uuid4(), title="Show C", release_year=2015, genres=[genres["Drama"]]),
        "D": TvShow(id=uuid.uuid4(), title="Show D", release_year=None,
                    genres=[genres["Crime"], genres["Drama"]]),
        "E": TvShow(id=uuid.uuid4(), title="Show E", release_year=2005, genres=[genres["Comedy"]]),
        "NoGenre": TvShow(id=uuid.uuid4(), title="Untagged Show", genres=[]),
    }

    users = {
        "alice": _make_user("alice@example.com", "Alice"),
        "bob": _make_user("bob@example.com"),
        "carol": _make_user("carol@example.com", "Carol"),
    }

    test_db_session.add_all(list(genres.values()) + list(shows.values()) + list(users.values()))
    test_db_session.commit()

    test_db_session.add_all([
        Favorite(user_id=users["alice"].id, tv_show_id=shows["A"].id),
        Favorite(user_id=users["alice"].id, tv_show_id=shows["B"].id),
        Favorite(user_id=users["carol"].id, tv_show_id=shows["NoGenre"].id),
    ])
    test_db_session.commit()

    return SimpleNamespace(
        genre_ids={name: genre.id for name, genre in genres.items()},
        show_ids={key: show.id for key, show in shows.items()},
        user_ids={key: user.id for key, user in users.items()},
    )


def make_show(title: str, genres: List[str], release_year: int | None = None) -> Dict:
    """Build a hydrated show dict as the data gateway returns it."""
    return {
        'show_id': uuid.uuid4(),
        'title': title,
        'description': None,
        'type': 'Scripted',
        'release_year': release_year,
        'genres': [{'id': name, 'name': name} for name in genres],
    }


class InMemoryGateway:
    """Data gateway over plain Python collections (genre ids are genre names)."""

    def __init__(self, shows: List[Dict], favorites: Dict | None = None, users: Dict | None = None):
        self.shows = {show['show_id']: show for show in shows}
        self.favorites = favorites or {}
        self.users = users or {}

    def user_by_id(self, user_id):
        return self.users.get(user_id)

    def favorited_show_ids(self, user_id):
        return set(self.favorites.get(user_id, []))

    def genre_ids_for_shows(self, show_ids):
        return {
            genre['id']
            for show_id in show_ids
            for genre in self.shows[show_id]['genres']
        }

    def candidate_overlap(self, genre_ids, exclude_show_ids, limit=100):
        associations = [
            (show_id, genre['id'])
            for show_id, show in self.shows.items()
            for genre in show['genres']
        ]
        counts = count_overlap(associations, set(genre_ids), set(exclude_show_ids))
        titles = {show_id: show['title'] for show_id, show in self.shows.items()}
        return order_candidates(counts, titles, limit)

    def hydrate_shows(self, show_ids):
        return [self.shows[show_id] for show_id in show_ids if show_id in self.shows]


@pytest.fixture
def show_factory():
    """Factory for hydrated show dicts."""
    return make_show


@pytest.fixture
def gateway_factory():
    """Factory for in-memory data gateways."""
    return InMemoryGateway


# ===== Mock Fixtures =====

@pytest.fixture
def mock_notifier():
    """Notifier that accepts every email."""
    mock = Mock()
    mock.send.return_value = {"status_code": 202, "message_id": "msg-1"}
    return mock


# ===== Configuration Fixtures =====

@pytest.fixture
def mock_config(monkeypatch):
    """Mock configuration values."""
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///:memory:')
    monkeypatch.setenv('SENDGRID_API_KEY', 'SG.test-key')
    monkeypatch.setenv('SENDGRID_FROM_EMAIL', 'noreply@tvtracker.test')
    monkeypatch.setenv('SENDGRID_FROM_NAME', 'TV Tracker Test')
    monkeypatch.setenv('SENDGRID_API_URL', 'https://sendgrid.test/v3/mail/send')
    monkeypatch.setenv('EMAIL_TIMEOUT_SECONDS', '5')


# ===== Azure Functions Fixtures =====

@pytest.fixture
def mock_http_request():
    """Mock Azure Functions HttpRequest."""
    mock_req = Mock()
    mock_req.route_params = {}
    mock_req.params = {}
    mock_req.get_json.return_value = {}
    return mock_req


@pytest.fixture
def mock_queue_message():
    """Factory for mock Azure Functions QueueMessage objects."""
    def _make(body: bytes):
        msg = Mock()
        msg.get_body.return_value = body
        return msg
    return _make


# ===== Script Fixtures =====

@pytest.fixture
def mock_sys_argv(monkeypatch):
    """Mock sys.argv for script testing."""
    def _mock_argv(args):
        monkeypatch.setattr('sys.argv', args)
    return _mock_argv
