# tests/test_init_db.py

import os
from unittest.mock import patch

from sqlalchemy import inspect

from app.core import init_db
from app.core.database import Base, engine

def test_create_tables_without_migrations():
    Base.metadata.drop_all(bind=engine)
    try:
        init_db.init_all(skip_migrations=True)
        tables = set(inspect(engine).get_table_names())
        assert {"users", "user_settings", "custom_filters", "tenders", "entities", "municipalities"} <= tables
    finally:
        Base.metadata.drop_all(bind=engine)

@patch("app.core.init_db.subprocess.check_call")
def test_migrations_run_alembic_upgrade(mock_call):
    init_db.init_all()
    args, kwargs = mock_call.call_args
    assert args[0] == ["alembic", "upgrade", "head"]
    assert os.path.isfile(os.path.join(kwargs["cwd"], "alembic.ini"))
