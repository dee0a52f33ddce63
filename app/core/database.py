from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from app.core.config import settings
import logging

# Configure logging
logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.database_url

# Log connection info (without sensitive data)
_url = make_url(SQLALCHEMY_DATABASE_URL)
logger.info(f"Connecting to database: {_url.drivername}://{_url.host or ''}/{_url.database} with user {_url.username}")

connect_args = {}
if _url.drivername.startswith("sqlite"):
    # SQLite is only used for local runs and tests
    connect_args["check_same_thread"] = False

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

def get_db():
    """
    Dependency for getting a database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
