"""Abstract interfaces for person storage.

The service depends only on :class:`PersonStore`, so the SQL-backed store and
the in-memory test double are interchangeable.
"""

from __future__ import annotations

from abc import ABC
from abc import abstractmethod
from typing import List
from typing import Optional

from person_registry.models.person import Person


class PersonStore(ABC):
    """Storage-access contract for person records.

    Every method is one independent unit of work: nothing is shared between
    calls and no method wraps another in a transaction.
    """

    @abstractmethod
    def insert(self, person: Person) -> Person:
        """Persist *person*, assign its generated ``id`` and return it."""
        pass

    @abstractmethod
    def find_by_id(self, person_id: int) -> Optional[Person]:
        """Return the stored person or ``None``."""
        pass

    @abstractmethod
    def find_all(self) -> List[Person]:
        """Return every stored person, newest ``created_at`` first."""
        pass

    @abstractmethod
    def exists_by_email(self, email: str) -> bool:
        """Return *True* when some stored person uses *email*."""
        pass

    @abstractmethod
    def update(self, person: Person) -> Person:
        """Overwrite name and email of the row with ``person.id``."""
        pass

    @abstractmethod
    def delete(self, person_id: int) -> None:
        """Remove the row with *person_id*."""
        pass
