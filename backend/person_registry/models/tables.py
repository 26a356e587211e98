"""Relational schema for person records (SQLAlchemy Core)."""

from sqlalchemy import Column
from sqlalchemy import DateTime
from sqlalchemy import Integer
from sqlalchemy import MetaData
from sqlalchemy import String
from sqlalchemy import Table
from sqlalchemy.sql import func

metadata = MetaData()

PEOPLE_TABLE_NAME = "people"

# ``email`` carries a UNIQUE constraint so the store itself rejects a duplicate
# that slipped past the service-level check under concurrent writers.
people = Table(
    PEOPLE_TABLE_NAME,
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(150), nullable=False, unique=True),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)


__all__ = ["PEOPLE_TABLE_NAME", "metadata", "people"]
