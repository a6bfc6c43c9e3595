"""Engine and session factory for the TV Tracker database."""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tvtracker_recommendation_service.config import get_database_url

DATABASE_URL = get_database_url()

if DATABASE_URL is None:
    raise ValueError("DATABASE_URL is not configured. Set the DATABASE_URL environment variable.")

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=False
)

# Services open one session per operation and close it themselves
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
