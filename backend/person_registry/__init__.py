"""Validated CRUD for person records on top of a single relational table."""

from person_registry.config import DatabaseConfig
from person_registry.config import DatabaseEnvironment
from person_registry.core.implementations import SQLPersonStore
from person_registry.core.interfaces import PersonStore
from person_registry.exceptions import ErrorKind
from person_registry.exceptions import PersonError
from person_registry.models.person import Person
from person_registry.services.person_service import PersonService

__version__ = "0.1.0"

__all__ = [
    "DatabaseConfig",
    "DatabaseEnvironment",
    "ErrorKind",
    "Person",
    "PersonError",
    "PersonService",
    "PersonStore",
    "SQLPersonStore",
]
