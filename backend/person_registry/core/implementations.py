"""SQLAlchemy implementation of :class:`PersonStore`.

Each public method runs exactly one statement on a connection acquired for
that call alone and released on every exit path (see
:func:`person_registry.database.db_connection`).  No connection outlives a
call.
"""

from __future__ import annotations

import logging
from typing import Any
from typing import List
from typing import Optional
from typing import Union

from sqlalchemy import Engine
from sqlalchemy import String
from sqlalchemy import func
from sqlalchemy import select
from sqlalchemy import type_coerce
from sqlalchemy.exc import IntegrityError
from sqlalchemy.exc import SQLAlchemyError

from person_registry.config import DatabaseConfig
from person_registry.core.interfaces import PersonStore
from person_registry.database import db_connection
from person_registry.database import dispose_engine
from person_registry.database import engine_from_config
from person_registry.database import make_engine
from person_registry.exceptions import conflict_error
from person_registry.exceptions import not_found_error
from person_registry.exceptions import storage_error
from person_registry.models.person import Person
from person_registry.models.tables import people
from person_registry.utils.time import coerce_timestamp
from person_registry.utils.time import utc_now_naive

logger = logging.getLogger(__name__)

# ``created_at`` is read back as the raw driver value (text on SQLite, a
# datetime on most other backends) and normalised in ``_row_to_person``.
_SELECT_COLUMNS = (
    people.c.id,
    people.c.name,
    people.c.email,
    type_coerce(people.c.created_at, String).label("created_at"),
)


# SQLSTATE for unique_violation, exposed as ``sqlstate`` by psycopg 3 and
# ``pgcode`` by psycopg2.  Drivers without a SQLSTATE (sqlite3, whose message
# reads "UNIQUE constraint failed") fall back to the message text.
_UNIQUE_VIOLATION_SQLSTATE = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == _UNIQUE_VIOLATION_SQLSTATE
    return "unique" in str(orig).lower()


class SQLPersonStore(PersonStore):
    """Person storage backed by a relational table.

    ``target`` is an existing :class:`~sqlalchemy.Engine`, an explicit
    :class:`DatabaseConfig`, or a database URL.  When the store builds the
    engine itself it also owns it and :meth:`close` disposes of it.
    """

    def __init__(self, target: Union[Engine, DatabaseConfig, str]):
        if isinstance(target, Engine):
            self.engine = target
            self._owns_engine = False
        elif isinstance(target, DatabaseConfig):
            self.engine = engine_from_config(target)
            self._owns_engine = True
        elif isinstance(target, str):
            if not target.strip():
                raise ValueError("Database URL must not be empty")
            self.engine = make_engine(target)
            self._owns_engine = True
        else:
            raise TypeError(f"Unsupported store target: {type(target).__name__}")

    def close(self) -> None:
        if self._owns_engine:
            dispose_engine(self.engine)

    # ------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_person(row: Any) -> Person:
        data = row._mapping
        try:
            created_at = coerce_timestamp(data["created_at"])
        except (TypeError, ValueError) as exc:
            raise storage_error(f"Unreadable created_at for person {data['id']}", exc) from exc

        return Person(
            id=data["id"],
            name=data["name"],
            email=data["email"],
            created_at=created_at,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, person: Person) -> Person:
        if person is None:
            raise ValueError("person must not be None")

        if person.created_at is None:
            person.created_at = utc_now_naive()

        stmt = people.insert().values(name=person.name, email=person.email, created_at=person.created_at)

        try:
            with db_connection(self.engine) as conn:
                result = conn.execute(stmt)
                if result.rowcount == 0:
                    raise storage_error("Could not save person, no rows affected")

                generated = result.inserted_primary_key
                if not generated or generated[0] is None:
                    raise storage_error("Could not obtain the id of the saved person")
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                logger.warning("Unique constraint rejected insert for %s", person.email)
                raise conflict_error("a person with this email already exists", exc) from exc
            logger.error("Error saving person: %s", exc)
            raise storage_error("Error saving person", exc) from exc
        except SQLAlchemyError as exc:
            logger.error("Error saving person: %s", exc)
            raise storage_error("Error saving person", exc) from exc

        person.id = generated[0]
        logger.debug("Inserted person id=%s", person.id)
        return person

    def update(self, person: Person) -> Person:
        stmt = people.update().where(people.c.id == person.id).values(name=person.name, email=person.email)

        try:
            with db_connection(self.engine) as conn:
                result = conn.execute(stmt)
                if result.rowcount == 0:
                    raise not_found_error(f"No person found with id {person.id}")
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                logger.warning("Unique constraint rejected update of person id=%s", person.id)
                raise conflict_error("a person with this email already exists", exc) from exc
            logger.error("Error updating person: %s", exc)
            raise storage_error("Error updating person", exc) from exc
        except SQLAlchemyError as exc:
            logger.error("Error updating person: %s", exc)
            raise storage_error("Error updating person", exc) from exc

        logger.debug("Updated person id=%s", person.id)
        return person

    def delete(self, person_id: int) -> None:
        stmt = people.delete().where(people.c.id == person_id)

        try:
            with db_connection(self.engine) as conn:
                result = conn.execute(stmt)
                if result.rowcount == 0:
                    raise not_found_error(f"No person found with id {person_id}")
        except SQLAlchemyError as exc:
            logger.error("Error deleting person: %s", exc)
            raise storage_error("Error deleting person", exc) from exc

        logger.debug("Deleted person id=%s", person_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_id(self, person_id: int) -> Optional[Person]:
        stmt = select(*_SELECT_COLUMNS).where(people.c.id == person_id)

        try:
            with db_connection(self.engine, transactional=False) as conn:
                row = conn.execute(stmt).first()
        except SQLAlchemyError as exc:
            logger.error("Error finding person by id: %s", exc)
            raise storage_error("Error finding person by id", exc) from exc

        if row is None:
            return None
        return self._row_to_person(row)

    def find_all(self) -> List[Person]:
        stmt = select(*_SELECT_COLUMNS)

        try:
            with db_connection(self.engine, transactional=False) as conn:
                rows = conn.execute(stmt).all()
        except SQLAlchemyError as exc:
            logger.error("Error listing people: %s", exc)
            raise storage_error("Error listing people", exc) from exc

        # Sorted after normalisation: mixed stored forms (epoch numbers, text
        # with offsets) do not compare correctly as raw column values.
        people_list = [self._row_to_person(row) for row in rows]
        people_list.sort(key=lambda person: (person.created_at, person.id), reverse=True)
        return people_list

    def exists_by_email(self, email: str) -> bool:
        stmt = select(func.count()).select_from(people).where(people.c.email == email)

        try:
            with db_connection(self.engine, transactional=False) as conn:
                count = conn.execute(stmt).scalar_one()
        except SQLAlchemyError as exc:
            logger.error("Error checking email: %s", exc)
            raise storage_error("Error checking email", exc) from exc

        return count > 0


__all__ = ["SQLPersonStore"]
