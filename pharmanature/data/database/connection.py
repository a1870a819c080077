"""Database connection and session management."""
import logging
import time
from sqlalchemy import create_engine, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.exc import OperationalError
from sqlalchemy.pool import StaticPool
from pharmanature.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """Create the engine, using a single shared connection for SQLite."""
    if database_url.startswith("sqlite"):
        # In-memory SQLite must reuse one connection across threads
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=False
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=False  # Set to True for SQL query logging
    )


engine = build_engine(settings.database_url)

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()

# Retry configuration
MAX_RETRIES = 3
RETRY_DELAY_SECONDS = 1


def get_db_session():
    """
    Get a database session with retry logic.
    Retries up to 3 times on connection failure.
    """
    last_error = None

    for attempt in range(MAX_RETRIES):
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
            return db
        except OperationalError as e:
            db.close()
            last_error = e
            if attempt < MAX_RETRIES - 1:
                logger.warning(
                    "[DB] Connection attempt %d failed, retrying in %ss...",
                    attempt + 1, RETRY_DELAY_SECONDS
                )
                time.sleep(RETRY_DELAY_SECONDS)
            else:
                logger.error("[DB] All %d connection attempts failed", MAX_RETRIES)

    raise last_error


def get_db():
    """Dependency for getting database session with retry logic."""
    db = get_db_session()
    try:
        yield db
    finally:
        db.close()
