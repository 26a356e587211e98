"""Business rules for person records.

:class:`PersonService` validates input, checks existence and e-mail
uniqueness through the injected :class:`PersonStore`, and only then delegates
the mutation.  Validation always happens before the store is touched.

The uniqueness check and the write are separate store calls with no
transaction around them.  Two concurrent writers using the same address can
both pass the check; the ``UNIQUE`` constraint on ``people.email`` is what
ultimately rejects the second write, and the store reports that as a
``CONFLICT`` too.
"""

import logging
import re
from typing import List
from typing import Optional

from person_registry.core.interfaces import PersonStore
from person_registry.exceptions import conflict_error
from person_registry.exceptions import not_found_error
from person_registry.exceptions import validation_error
from person_registry.models.person import Person

logger = logging.getLogger(__name__)

ERROR_PERSON_NONE = "person must not be None"
ERROR_NAME_REQUIRED = "name is required"
ERROR_EMAIL_REQUIRED = "email is required"
ERROR_EMAIL_FORMAT = "invalid email format"
ERROR_EMAIL_DUPLICATE = "a person with this email already exists"
ERROR_PERSON_NOT_FOUND = "person not found"
ERROR_ID_NONE = "id must not be None"
ERROR_ID_REQUIRED_FOR_UPDATE = "id is required to update a person"

# Case-sensitive; the whole string must match.
EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})$")


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def validate_person(person: Optional[Person]) -> None:
    """Raise a ``VALIDATION`` :class:`PersonError` unless *person* has a name and a well-formed email."""

    if person is None:
        raise validation_error(ERROR_PERSON_NONE)
    if _is_blank(person.name):
        raise validation_error(ERROR_NAME_REQUIRED)
    if _is_blank(person.email):
        raise validation_error(ERROR_EMAIL_REQUIRED)
    if not EMAIL_PATTERN.fullmatch(person.email):
        raise validation_error(ERROR_EMAIL_FORMAT)


class PersonService:
    """Create, read, update, delete and list person records."""

    def __init__(self, store: PersonStore):
        self.store = store

    def create(self, person: Person) -> Person:
        """Persist a new person and return it with its assigned id."""

        validate_person(person)

        if self.store.exists_by_email(person.email):
            logger.warning("Rejected create: email %s already in use", person.email)
            raise conflict_error(ERROR_EMAIL_DUPLICATE)

        created = self.store.insert(person)
        logger.info("Created person id=%s", created.id)
        return created

    def fetch_by_id(self, person_id: Optional[int]) -> Person:
        if person_id is None:
            raise validation_error(ERROR_ID_NONE)

        person = self.store.find_by_id(person_id)
        if person is None:
            raise not_found_error(ERROR_PERSON_NOT_FOUND)
        return person

    def list_all(self) -> List[Person]:
        """Return every person, most recently created first."""

        return self.store.find_all()

    def update(self, person: Person) -> Person:
        """Overwrite name and email of an existing person.

        Keeping one's own email is not a conflict; taking an email that belongs
        to a *different* id is.  ``created_at`` of the returned record is the
        persisted one, since updates never change it.
        """

        validate_person(person)
        if person.id is None:
            raise validation_error(ERROR_ID_REQUIRED_FOR_UPDATE)

        current = self.fetch_by_id(person.id)

        for other in self.store.find_all():
            if other.email == person.email and other.id != person.id:
                logger.warning("Rejected update of id=%s: email %s belongs to id=%s", person.id, person.email, other.id)
                raise conflict_error(ERROR_EMAIL_DUPLICATE)

        updated = self.store.update(person)
        updated.created_at = current.created_at
        logger.info("Updated person id=%s", updated.id)
        return updated

    def delete(self, person_id: Optional[int]) -> None:
        self.fetch_by_id(person_id)
        self.store.delete(person_id)
        logger.info("Deleted person id=%s", person_id)
