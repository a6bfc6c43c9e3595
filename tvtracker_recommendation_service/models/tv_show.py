"""TV show catalog and its genre associations."""
import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, Text, Uuid
from sqlalchemy.orm import relationship

from tvtracker_recommendation_service.models.base import Base

# Many-to-many link between shows and genres
tv_show_genres = Table(
    "tv_show_genres",
    Base.metadata,
    Column("tv_show_id", Uuid, ForeignKey("tv_shows.id", ondelete="CASCADE"), primary_key=True),
    Column("genre_id", Uuid, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True),
)


class TvShow(Base):
    """A TV show with its optional metadata and genres."""
    __tablename__ = "tv_shows"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=True)
    release_year = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    genres = relationship("Genre", secondary=tv_show_genres, lazy="selectin")

    def __repr__(self):
        return f"<TvShow(id={self.id}, title='{self.title}')>"
