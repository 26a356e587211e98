import pytest
from sqlalchemy.pool import StaticPool

from person_registry.core.implementations import SQLPersonStore
from person_registry.core.test_implementations import InMemoryPersonStore
from person_registry.database import drop_database
from person_registry.database import initialize_database
from person_registry.database import make_engine
from person_registry.services.person_service import PersonService

# Create a test database - using in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

test_engine = make_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # Use StaticPool for in-memory database
)


@pytest.fixture
def db_engine():
    """
    Creates a fresh schema for each test, then tears it down after the test is done.
    """
    initialize_database(test_engine)
    try:
        yield test_engine
    finally:
        drop_database(test_engine)


@pytest.fixture
def sql_store(db_engine):
    return SQLPersonStore(db_engine)


@pytest.fixture
def memory_store():
    return InMemoryPersonStore()


@pytest.fixture(params=["sql", "memory"])
def store(request):
    """Run the test once against the real SQL store and once against the in-memory double."""
    if request.param == "sql":
        return request.getfixturevalue("sql_store")
    return request.getfixturevalue("memory_store")


@pytest.fixture
def service(store):
    return PersonService(store)
