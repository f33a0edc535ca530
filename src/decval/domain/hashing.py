"""Object hashing.

The default method mirrors a 32-bit Java-style string hash folded over the
values of an object graph; it is deterministic across processes (unlike the
builtin :func:`hash` on strings). ``sha256`` is offered for callers that need
a collision-resistant digest.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Callable, Mapping
from datetime import date
from enum import Enum
from typing import Any, ClassVar

from decval.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

HashingFunction = Callable[..., str]

DEFAULT_HASHING_METHOD = "default"

_INT32 = 2**32


def _to_int32(value: int) -> int:
    return (value + 2**31) % _INT32 - 2**31


def hash_code(value: object) -> int:
    """32-bit Java-style hash of ``str(value)``."""
    h = 0
    for char in str(value):
        h = _to_int32((h << 5) - h + ord(char))
    return h


def _values(obj: Any) -> list[Any] | None:
    """Child values of a container-like *obj*, or None for scalars."""
    if isinstance(obj, Mapping):
        return list(obj.values())
    if isinstance(obj, (list, tuple)):
        return list(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    if isinstance(obj, Enum):
        return None
    if hasattr(obj, "__dict__") and not isinstance(obj, type):
        return [v for k, v in vars(obj).items() if not k.startswith("_")]
    return None


def _hash_value(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, date):
        return hash_code(value.isoformat())
    children = _values(value) if not isinstance(value, (str, bytes)) else None
    if children is None:
        return hash_code(value)
    h = 0
    for child in children:
        h = _to_int32((h << 5) - h + _hash_value(child))
    return h


def hash_obj(obj: Any) -> str:
    """Default hashing method: fold :func:`hash_code` over *obj*'s values."""
    return str(abs(_hash_value(obj)))


def _plain(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return {str(k): _plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_plain(v) for v in obj]
    if isinstance(obj, (set, frozenset)):
        return sorted((_plain(v) for v in obj), key=repr)
    if isinstance(obj, date):
        return obj.isoformat()
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "__dict__") and not isinstance(obj, type):
        return {k: _plain(v) for k, v in vars(obj).items() if not k.startswith("_")}
    return obj


def sha256_obj(obj: Any) -> str:
    """Hex SHA-256 digest of *obj*'s canonical JSON form."""
    payload = json.dumps(_plain(obj), sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class Hashing:
    """Registry of named hashing functions with a switchable default."""

    _current: ClassVar[str] = DEFAULT_HASHING_METHOD
    _cache: ClassVar[dict[str, HashingFunction]] = {
        DEFAULT_HASHING_METHOD: hash_obj,
        "sha256": sha256_obj,
    }

    @classmethod
    def get(cls, key: str) -> HashingFunction:
        """Return the function registered under *key*.

        Raises:
            ConfigurationError: If nothing is registered under *key*.
        """
        try:
            return cls._cache[key]
        except KeyError:
            msg = f"No hashing method registered under {key}"
            raise ConfigurationError(msg) from None

    @classmethod
    def register(cls, key: str, func: HashingFunction, *, default: bool = False) -> None:
        """Register *func* under *key*, optionally making it the default.

        Raises:
            ConfigurationError: If *key* is already taken.
        """
        if key in cls._cache:
            msg = f"Hashing method {key} already registered"
            raise ConfigurationError(msg)
        cls._cache[key] = func
        logger.debug("Registered hashing method %s", key)
        if default:
            cls._current = key

    @classmethod
    def hash(cls, obj: Any, method: str | None = None, *args: Any) -> str:
        return cls.get(method or cls._current)(obj, *args)

    @classmethod
    def set_default(cls, key: str) -> None:
        cls.get(key)
        cls._current = key

    @classmethod
    def current(cls) -> str:
        return cls._current
