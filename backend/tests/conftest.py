import os
import pytest
import sys
import tempfile
import uuid
from typing import Generator
from sqlmodel import Session, create_engine

# 1. Path resolution: put the backend directory on sys.path
CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.dirname(CURRENT_DIR)
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

# Keep the default engine and the log files away from the user data directory
TEST_ROOT = os.path.join(tempfile.gettempdir(), "setlist_studio_tests")
os.environ.setdefault("DB_PATH", os.path.join(TEST_ROOT, "default.duckdb"))
os.environ.setdefault("SETLIST_STUDIO_LOG_DIR", os.path.join(TEST_ROOT, "logs"))

import infra.database.connection as db_connection
from infra.database.schema import init_raw_db

TEST_USER_ID = "user-1@example.com"
OTHER_USER_ID = "user-2@example.com"

@pytest.fixture(name="session", scope="function")
def session_fixture(mocker) -> Generator[Session, None, None]:
    """
    A fully isolated database (physical file) per test.
    """
    unique_id = str(uuid.uuid4())
    test_db_path = os.path.join(tempfile.gettempdir(), f"setlist_studio_test_{unique_id}.duckdb")

    connect_args = {'config': {'worker_threads': 4, 'access_mode': 'READ_WRITE'}}
    engine = create_engine(
        f"duckdb:///{test_db_path}",
        connect_args=connect_args
    )

    # swap the application-wide engine for the test engine
    db_connection.engine = engine
    db_connection.DB_PATH = test_db_path
    db_connection.DATABASE_URL = f"duckdb:///{test_db_path}"

    # 1. Tables and sequences via raw SQL
    init_raw_db(engine)

    # 2. The lifespan handler must not touch the database during tests
    mocker.patch("infra.database.connection.init_db")
    mocker.patch("main.init_db")
    mocker.patch("main.close_db")

    with Session(engine) as session:
        yield session

    engine.dispose()
    if os.path.exists(test_db_path):
        try:
            os.remove(test_db_path)
        except OSError:
            pass

@pytest.fixture(name="client")
def client_fixture(session: Session) -> Generator:
    """TestClient with the DB session injected and the X-User-Id header preset."""
    from fastapi.testclient import TestClient
    from main import app
    from infra.database.connection import get_session

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    with TestClient(app, headers={"X-User-Id": TEST_USER_ID}) as client:
        yield client
    app.dependency_overrides.clear()

@pytest.fixture(name="user_id")
def user_id_fixture() -> str:
    return TEST_USER_ID

@pytest.fixture(name="other_user_id")
def other_user_id_fixture() -> str:
    return OTHER_USER_ID
