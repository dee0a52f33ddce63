"""
Pytest configuration file for all tests.
This file is automatically loaded by pytest.
"""

import os
import sys
import pytest
from dotenv import load_dotenv

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(os.path.dirname(__file__))))

# Load test environment variables
def load_test_env():
    """Load environment variables from .env.test file"""
    root_dir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    env_test_path = os.path.join(root_dir, '.env.test')

    if os.path.exists(env_test_path):
        print(f"Loading test environment from: {env_test_path}")
        load_dotenv(env_test_path, override=True)
        return True
    else:
        print(f"Warning: Test environment file not found: {env_test_path}")
        return False

# Load test environment variables before the app reads its settings
load_test_env()
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.core.database import get_db, Base
from app.core.gateway import DataGateway
from app.modules.auth.models import User
from app.modules.auth.services import get_password_hash, create_access_token

# Create a test database engine
TEST_SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(
    TEST_SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False}  # SQLite specific argument
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Override the dependency
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()

app.dependency_overrides[get_db] = override_get_db

@pytest.fixture
def setup_db():
    """Fresh tables for every test"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)

@pytest.fixture
def db_session(setup_db):
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def gateway(db_session):
    return DataGateway(db_session)

@pytest.fixture
def client(setup_db):
    return TestClient(app)

@pytest.fixture
def make_user(db_session):
    """
    Create a user and return ``(user_id, headers)`` with a bearer token for it.
    """
    def _make_user(email="user@example.com", password="Password123!"):
        user = User(email=email, password_hash=get_password_hash(password))
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        token = create_access_token(data={"sub": email})
        return str(user.id), {"Authorization": f"Bearer {token}"}

    return _make_user

@pytest.fixture
def add_tenders(db_session):
    """Insert Tender rows given as keyword dicts; returns the stored rows."""
    from app.modules.tenders.models import Tender

    def _add_tenders(*rows):
        tenders = []
        for index, fields in enumerate(rows):
            fields = dict(fields)
            fields.setdefault("id", f"t{index + 1}")
            fields.setdefault("title", f"Concurso {fields['id']}")
            tender = Tender(**fields)
            db_session.add(tender)
            tenders.append(tender)
        db_session.commit()
        return tenders

    return _add_tenders
