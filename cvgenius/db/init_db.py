import logging

from cvgenius.db.base import Base
from cvgenius.db.session import engine
import cvgenius.db.models  # noqa: F401  (registers every table on Base.metadata)

logger = logging.getLogger(__name__)


def init_db(bind=None) -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database & tables ready")
