from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from portfolio_api.config import settings
from portfolio_api.config_manager import get_api_config
import logging

logger = logging.getLogger(__name__)

# Lazy engine creation to avoid connection issues at import time
engine = None
SessionLocal = None


def get_engine():
    global engine
    if engine is None:
        database_url = settings.database_url
        logger.info(f"Creating database engine for: {database_url}")
        logging.getLogger('sqlalchemy.engine').setLevel(get_api_config().sqlalchemy_log_level)

        connect_args = {}
        if database_url.startswith("sqlite"):
            # Candidate relation lookups run on worker threads
            connect_args["check_same_thread"] = False
        engine = create_engine(database_url, connect_args=connect_args)
    return engine


def get_session_local():
    global SessionLocal
    if SessionLocal is None:
        SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return SessionLocal


def reset_engine():
    """Dispose the current engine so the next call picks up a new database URL."""
    global engine, SessionLocal
    if engine is not None:
        engine.dispose()
    engine = None
    SessionLocal = None


Base = declarative_base()

