"""Fixtures for tests that run against a real MongoDB."""
import asyncio

import pytest
import pytest_asyncio
from dependency_injector import providers
from testcontainers.mongodb import MongoDbContainer

from src.app.containers import Container
from src.shared.database.database import Database, DatabaseSettings


@pytest.fixture(scope="module")
def mongo_container():
    """Start a MongoDB container for testing. Module-scoped for reuse."""
    container = MongoDbContainer("mongo:7.0")
    try:
        container.start()
    except Exception as e:
        pytest.skip(f"Docker is not available: {e}")
    yield container
    container.stop()


async def wait_till_db_ready(db: Database, max_attempts: int = 20):
    """
    Wait for database to be ready.

    Args:
        db: Database instance to test
        max_attempts: Maximum number of connection attempts

    Raises:
        Exception: If database is not ready after max_attempts
    """
    for attempt in range(max_attempts):
        try:
            await db.ping()
            return
        except Exception:
            await asyncio.sleep(0.2)
    raise Exception(f"Database not ready after {max_attempts} attempts")


@pytest_asyncio.fixture(scope="function")
async def db(mongo_container):
    """
    Create database instance against a fresh test database.
    Function-scoped for test isolation.
    """
    db_settings = DatabaseSettings(
        db_url=mongo_container.get_connection_url(),
        db_name="timetrack_test",
    )
    db = Database(db_settings)
    await wait_till_db_ready(db)
    await db.drop()
    yield db
    await db.drop()
    await db.close()


@pytest.fixture(scope="function")
def test_container(db):
    """
    Create a test container with the database singleton overridden by the test database.
    Function-scoped to ensure each test gets a fresh container.
    """
    container = Container()
    container.database.override(providers.Object(db))
    yield container
    container.database.reset_override()


@pytest.fixture
def client_service(test_container):
    return test_container.client_service()


@pytest.fixture
def project_service(test_container):
    return test_container.project_service()


@pytest.fixture
def task_service(test_container):
    return test_container.task_service()
