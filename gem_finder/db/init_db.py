"""Create the schema on startup for local and SQLite deployments."""

from gem_finder import models  # noqa: F401
from gem_finder.db.base import Base
from gem_finder.db.session import db_manager
from gem_finder.utils.logger import get_logger


logger = get_logger("init_db")


def init_db() -> None:
    Base.metadata.create_all(bind=db_manager.engine)
    logger.info(f"Database schema ready on {db_manager.engine.url.render_as_string(hide_password=True)}")
