"""In-memory person record.

The record is a plain data holder: all rule enforcement lives in
:mod:`person_registry.services.person_service`.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import Optional

from person_registry.utils.time import utc_now_naive


@dataclass(eq=False)
class Person:
    """A person record.

    Identity is the e-mail address: two records with the same ``email`` are the
    same person even when ``id``, ``name`` or ``created_at`` differ.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    id: Optional[int] = None
    created_at: datetime = field(default_factory=utc_now_naive)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Person):
            return NotImplemented
        return self.email == other.email

    def __hash__(self) -> int:
        return hash(self.email)
