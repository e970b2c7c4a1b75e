# tests/conftest.py
import os
import shutil
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Settings and loggers are built at import time, so point storage at a temp
# directory before the package is imported
TEST_STORAGE_DIR = Path(tempfile.mkdtemp(prefix="blueprint-tests-"))
os.environ["STORAGE_PATH"] = str(TEST_STORAGE_DIR)
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_STORAGE_DIR / 'blueprint.db'}"

from blueprint.main import app
from blueprint.database import Base, get_db
from blueprint.config import settings
from blueprint.models import ProjectStatus, DocumentType
from blueprint.services import project_service, versioning_service

# Create test database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

@pytest.fixture(scope="session")
def engine():
    """Create test database engine"""
    engine = create_engine(
        SQLALCHEMY_TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool  # Needed for SQLite in-memory database
    )
    return engine

@pytest.fixture
def tables(engine):
    """Fresh tables for every test"""
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)

@pytest.fixture
def db_session(engine, tables):
    """Creates a new database session for a test"""
    session = sessionmaker(bind=engine, autoflush=False)()

    yield session

    session.close()

@pytest.fixture(scope="session")
def temp_storage_dir():
    """Temporary storage directory for logs and the app database"""
    yield TEST_STORAGE_DIR
    shutil.rmtree(TEST_STORAGE_DIR, ignore_errors=True)

@pytest.fixture(autouse=True)
def override_settings(temp_storage_dir):
    """Override settings for testing"""
    original_storage = settings.STORAGE_PATH
    original_logs = settings.LOGS_PATH

    settings.STORAGE_PATH = temp_storage_dir
    settings.LOGS_PATH = temp_storage_dir / "logs"

    yield

    settings.STORAGE_PATH = original_storage
    settings.LOGS_PATH = original_logs

@pytest.fixture
def single_deployment():
    """Enable demotion of other deployed versions for the duration of a test"""
    original = settings.ENFORCE_SINGLE_DEPLOYMENT
    settings.ENFORCE_SINGLE_DEPLOYMENT = True
    yield
    settings.ENFORCE_SINGLE_DEPLOYMENT = original

@pytest.fixture
def client(db_session):
    """Test client using the test database"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

@pytest.fixture
def sample_project(db_session):
    """Create a sample project"""
    return project_service.create_project(
        db_session,
        name="Test Project",
        description="Test Description",
        status=ProjectStatus.ACTIVE
    )

@pytest.fixture
def sample_document(db_session, sample_project):
    """Create a sample document (comes with its draft version 1)"""
    return versioning_service.create_document(
        db_session,
        project_id=sample_project.id,
        title="Test Document",
        content="First draft",
        document_type=DocumentType.SPECIFICATION
    )

@pytest.fixture
def committed_version(db_session, sample_document):
    """Version 2 of the sample document"""
    return versioning_service.create_new_version(
        db_session, sample_document.id, commit_message="Second pass"
    )

@pytest.fixture(scope="session", autouse=True)
def cleanup_test_files():
    """Clean up test files after all tests are done"""
    yield
    for file in ["test.db", "blueprint.db"]:
        if os.path.exists(file):
            os.remove(file)
