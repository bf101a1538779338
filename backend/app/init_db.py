"""Create the booking tables on the configured database."""

import logging

from sqlalchemy.engine import Engine

from app import models  # noqa: F401  registers every mapped table on Base.metadata
from app.database import Base, engine

logger = logging.getLogger(__name__)


def init_db(bind: Engine = engine) -> None:
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=bind)
    logger.info("Tables created successfully")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
