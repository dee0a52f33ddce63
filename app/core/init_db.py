from app.core.database import Base, engine
import logging
import subprocess
import os

# Configure logging
logger = logging.getLogger(__name__)

# Use Alembic to run migrations
def run_migrations():
    try:
        logger.info("Running database migrations with Alembic")
        # Get the absolute path of the project root
        project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))

        # Run Alembic migrations
        subprocess.check_call(
            ["alembic", "upgrade", "head"],
            cwd=project_root
        )
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Error running migrations: {str(e)}")
        raise

# Create all SQL tables
def create_tables():
    # Import the models so they are registered on Base.metadata
    from app.modules.auth import models as auth_models  # noqa: F401
    from app.modules.filters import models as filter_models  # noqa: F401
    from app.modules.tenders import models as tender_models  # noqa: F401

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("SQL tables created successfully")
    except Exception as e:
        logger.error(f"Error creating SQL tables: {str(e)}")
        raise

def init_all(skip_migrations: bool = False):
    """Initialize all database components"""
    if skip_migrations:
        # Local development against SQLite
        create_tables()
    else:
        run_migrations()

    logger.info("Database initialization completed")

if __name__ == "__main__":
    from app.core.log_config import configure_logging
    configure_logging("INFO")

    import argparse
    parser = argparse.ArgumentParser(description='Initialize the database')
    parser.add_argument('--skip-migrations', action='store_true', help='Create tables directly instead of running migrations')

    args = parser.parse_args()
    init_all(skip_migrations=args.skip_migrations)
