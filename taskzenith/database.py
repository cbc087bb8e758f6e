import logging
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker

from taskzenith.config import settings

logger = logging.getLogger(__name__)

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
FALLBACK_SQLITE_URL = "sqlite:///" + os.path.join(os.path.dirname(PACKAGE_DIR), "taskzenith.db")


def _engine_for(url: str):
    if make_url(url).get_backend_name() == "sqlite":
        # FastAPI runs sync routes in a threadpool
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


def _build_engine():
    """Engine for ``DATABASE_URL``, or the local SQLite file when it is unset or unusable."""
    if settings.DATABASE_URL:
        try:
            engine = _engine_for(settings.DATABASE_URL)
            with engine.connect():
                pass
            logger.debug("Connected to %s", engine.url.render_as_string(hide_password=True))
            return engine
        except ModuleNotFoundError as exc:
            logger.warning("No driver for DATABASE_URL (%s); using %s", exc, FALLBACK_SQLITE_URL)
        except Exception as exc:
            logger.warning("DATABASE_URL unreachable (%s); using %s", exc, FALLBACK_SQLITE_URL)

    return _engine_for(FALLBACK_SQLITE_URL)


engine = _build_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Request-scoped session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
