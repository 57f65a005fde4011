import logging

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker
from medcon.common.config import settings  # Import the settings object
from medcon.models.models import Base

logger = logging.getLogger(__name__)

# SQLite needs cross-thread access because FastAPI may hand the session to a worker thread
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(engine, expire_on_commit=False)


def connect_to_db():
    """Connect to the database and make sure the storage table exists."""
    try:
        with engine.begin() as conn:
            conn.execute(text("SELECT 1"))
        Base.metadata.create_all(engine)
        logger.info("Database connected successfully")
    except Exception as e:
        logger.error("Error connecting to the database: %s", e)
        raise


def close_db_connection():
    """Close the database connection."""
    try:
        engine.dispose()
        logger.info("Database connection closed successfully")
    except Exception as e:
        logger.error("Error closing the database connection: %s", e)
        raise
