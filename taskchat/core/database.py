import logging

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, create_engine, Session

from taskchat.core.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(
    f"sqlite:///{settings.db_path}",
    echo=settings.debug,
    connect_args={"check_same_thread": False},
)

REQUIRED_TABLES = ("task", "category", "conversation", "chatmessage")


def init_db() -> None:
    import taskchat.models  # noqa: F401 - ensure models are registered
    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session


def check_connection(db_engine=None) -> dict:
    """Probe the store and report whether the application tables exist."""
    db_engine = db_engine or engine
    try:
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            existing = set(inspect(conn).get_table_names())
    except SQLAlchemyError as e:
        logger.error(f"Store connection error: {e}")
        return {
            "success": False,
            "message": f"Failed to connect to the database: {e}",
        }

    missing = [t for t in REQUIRED_TABLES if t not in existing]
    if missing:
        return {
            "success": True,
            "message": "Connected to the database, but some tables don't exist yet.",
            "missing_tables": missing,
            "database_status": "needs_setup",
        }
    return {
        "success": True,
        "message": "Successfully connected to the database and verified tables",
        "database_status": "ready",
    }
