"""Genre lookup table"""
import uuid

from sqlalchemy import Column, String, Uuid

from tvtracker_recommendation_service.models.base import Base


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)

    def __repr__(self):
        return f"<Genre(id={self.id}, name='{self.name}')>"
