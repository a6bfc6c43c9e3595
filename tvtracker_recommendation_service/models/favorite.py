"""User favorites: one row per (user, show)."""
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, Uuid

from tvtracker_recommendation_service.models.base import Base


class Favorite(Base):
    __tablename__ = "favorites"

    # Composite primary key keeps (user, show) unique
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    tv_show_id = Column(Uuid, ForeignKey("tv_shows.id", ondelete="CASCADE"), primary_key=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        Index("idx_favorites_user_id", "user_id"),
    )

    def __repr__(self):
        return f"<Favorite(user_id={self.user_id}, tv_show_id={self.tv_show_id})>"
