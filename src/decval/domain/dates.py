"""Date parsing and formatting with strftime-style formats."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from decval.domain.keys import DEFAULT_DATE_FORMAT


def parse_date(value: Any, fmt: str = DEFAULT_DATE_FORMAT) -> datetime:
    """Turn *value* into a :class:`datetime`.

    Accepts datetimes, dates, POSIX timestamps and strings matching *fmt*.
    Strings that do not match *fmt* are tried as ISO-8601 before giving up.

    Raises:
        ValueError: If *value* cannot be interpreted as a date.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value)
    if isinstance(value, str):
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            return datetime.fromisoformat(value)
    msg = f"Cannot interpret {type(value).__name__} as a date"
    raise ValueError(msg)


def format_date(value: date, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Render *value* with *fmt*."""
    return value.strftime(fmt)


def coerce_date(value: Any, fmt: str = DEFAULT_DATE_FORMAT) -> Any:
    """Best-effort conversion used when a date property is assigned.

    Strings must match *fmt* exactly; there is no ISO-8601 fallback here.
    Values that cannot be parsed are returned unchanged so the date rule can
    report them on the next validation run.
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        if isinstance(value, str):
            return datetime.strptime(value, fmt)
        return parse_date(value, fmt)
    except (ValueError, OverflowError, OSError):
        return value


def comparable(value: Any, bound: Any) -> tuple[Any, Any]:
    """Align a date *value* and a date *bound* so that they can be compared.

    A bound given as a string is parsed as ISO-8601; ``date`` and
    ``datetime`` operands are widened to ``datetime``.

    Raises:
        ValueError: If a string bound is not a valid date.
    """
    if not isinstance(value, date):
        return value, bound
    if isinstance(bound, str):
        bound = datetime.fromisoformat(bound)
    if isinstance(value, datetime) and not isinstance(bound, datetime) and isinstance(bound, date):
        bound = datetime(bound.year, bound.month, bound.day)
    elif isinstance(bound, datetime) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value, bound


_default_format = DEFAULT_DATE_FORMAT


def get_default_format() -> str:
    """Format used by ``date()`` rules that do not name one."""
    return _default_format


def set_default_format(fmt: str) -> None:
    global _default_format
    _default_format = fmt
