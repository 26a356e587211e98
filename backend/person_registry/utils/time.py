"""Timezone helpers – a single naive-UTC *now()* plus timestamp coercion.

Person records carry a naive UTC ``created_at``.  SQLite hands stored values
back in whatever shape the column affinity produced (text, numbers, or an
already-parsed ``datetime`` when SQLAlchemy's ``DateTime`` processor ran), so
the storage layer funnels every value through :func:`coerce_timestamp`.
"""

from datetime import date
from datetime import datetime
from datetime import time
from datetime import timezone
from typing import Any
from typing import Optional


def utc_now_naive() -> datetime:  # noqa: D401 – simple utility
    """Return *naive* current time in UTC for database compatibility.

    SQLAlchemy DateTime columns without timezone info store naive datetimes.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _parse_text(raw: str) -> datetime:
    text = raw.strip()
    # ``datetime.fromisoformat`` rejects a trailing "Z" on older interpreters.
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _to_naive_utc(datetime.fromisoformat(text))


def coerce_timestamp(value: Any) -> Optional[datetime]:
    """Normalise a stored timestamp into a naive UTC ``datetime``.

    Accepted inputs:

    * ``None`` – returned unchanged.
    * ``datetime`` – aware values are converted to UTC and made naive.
    * ``date`` – midnight of that day.
    * ``str`` / ``bytes`` – ISO-8601 text with either ``T`` or a space as the
      separator (``CURRENT_TIMESTAMP`` produces the latter).
    * ``int`` / ``float`` – seconds since the Unix epoch.

    Raises ``ValueError`` for text that does not parse or an epoch outside the
    platform's range, and ``TypeError`` for anything else.
    """

    if value is None:
        return None
    if isinstance(value, datetime):
        return _to_naive_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _parse_text(bytes(value).decode("utf-8"))
    if isinstance(value, str):
        return _parse_text(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"Epoch timestamp out of range: {value!r}") from exc

    raise TypeError(f"Unsupported timestamp representation: {type(value).__name__}")


__all__ = ["coerce_timestamp", "utc_now_naive"]
