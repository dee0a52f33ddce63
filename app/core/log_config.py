import logging
from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def configure_logging(level: str = None) -> None:
    """
    Configure the root logger once, from LOG_LEVEL unless a level is given.
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)

    # SQLAlchemy echoes every statement at INFO
    if level_name != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
