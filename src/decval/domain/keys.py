"""Canonical keys, default messages and default patterns.

Rule keys are stored in the metadata store under the ``validation.`` prefix
(see :func:`reflect_key`); model-level keys (anchor, hashing, serialization)
live under :class:`ModelKeys`.
"""

from __future__ import annotations

import re
from enum import StrEnum

REFLECT_PREFIX = "validation."


class ValidationKeys(StrEnum):
    """Rule kinds understood by the built-in validators."""

    REQUIRED = "required"
    MIN = "min"
    MAX = "max"
    STEP = "step"
    MIN_LENGTH = "minlength"
    MAX_LENGTH = "maxlength"
    PATTERN = "pattern"
    EMAIL = "email"
    URL = "url"
    PASSWORD = "password"
    DATE = "date"
    TYPE = "type"
    LIST = "list"
    ENUM = "enum"
    EQUALS = "equals"
    DIFF = "different"
    LESS_THAN = "lessThan"
    LESS_THAN_OR_EQUAL = "lessThanOrEqual"
    GREATER_THAN = "greaterThan"
    GREATER_THAN_OR_EQUAL = "greaterThanOrEqual"


class ModelKeys(StrEnum):
    """Model-level metadata keys."""

    TYPE = "design:type"
    MODEL = "model"
    ANCHOR = "__model"
    HASHING = "hashing"
    SERIALIZATION = "serialization"
    BUILDER = "builder"


# Builtin type names that never resolve to a nested model.
RESERVED_TYPES: frozenset[str] = frozenset(
    {
        "any",
        "object",
        "str",
        "string",
        "int",
        "float",
        "complex",
        "decimal",
        "number",
        "bool",
        "boolean",
        "bytes",
        "date",
        "datetime",
        "time",
        "timedelta",
        "dict",
        "list",
        "tuple",
        "set",
        "frozenset",
        "array",
        "nonetype",
        "uuid",
        "enum",
    }
)

COLLECTION_TYPES: frozenset[str] = frozenset({"list", "tuple", "set", "frozenset", "array"})

DEFAULT_ERROR_MESSAGES: dict[str, str] = {
    "REQUIRED": "This field is required",
    "MIN": "The minimum value is {0}",
    "MAX": "The maximum value is {0}",
    "MIN_LENGTH": "The minimum length is {0}",
    "MAX_LENGTH": "The maximum length is {0}",
    "PATTERN": "The value does not match the pattern",
    "EMAIL": "The value is not a valid email",
    "URL": "The value is not a valid URL",
    "TYPE": "Invalid type. Expected {0}, received {1}",
    "STEP": "Invalid value. Not a step of {0}",
    "DATE": "Invalid value. not a valid Date",
    "DEFAULT": "There is an Error",
    "PASSWORD": (
        "Must be at least 8 characters and contain one of number, lower and upper "
        "case letters, and special character (@$!%*?&_-.,)"
    ),
    "LIST": "Invalid list of {0}",
    "LIST_REQUIRED": "Array or Set property '{0}' requires a @list decorator",
    "LIST_ELEMENT": "Value is not an instance of expected type(s) {0}",
    "MODEL_NOT_FOUND": "Missing model registry for type {0}",
    "ENUM": "Invalid value. Must be one of {0}",
    "EQUALS": "This field must be equal to field {0}",
    "DIFF": "This field must be different from field {0}",
    "LESS_THAN": "This field must be less than field {0}",
    "LESS_THAN_OR_EQUAL": "This field must be less than or equal to field {0}",
    "GREATER_THAN": "This field must be greater than field {0}",
    "GREATER_THAN_OR_EQUAL": "This field must be greater than or equal to field {0}",
}

PATH_ERROR_MESSAGES: dict[str, str] = {
    "INVALID_PATH": "Invalid path argument. Expected non-empty string but received: '{0}'",
    "CONTEXT_NOT_OBJECT": (
        "Unable to access parent at level {0} for path '{1}': current context is not an object"
    ),
    "PROPERTY_INVALID": "Failed to resolve path {0}: property '{1}' is invalid or does not exist.",
    "UNSUPPORTED_TYPES": "Unsupported types for comparison: '{0}' and '{1}'",
}

DEFAULT_PATTERNS: dict[str, re.Pattern[str]] = {
    "EMAIL": re.compile(
        r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
        r"@(?:[a-zA-Z0-9](?:[a-z0-9-]*[a-zA-Z0-9])?\.)+"
        r"[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?"
    ),
    "URL": re.compile(
        r"^(?:(?:(?:https?|ftp):)?//)(?:\S+(?::\S*)?@)?"
        r"(?:(?!(?:10|127)(?:\.\d{1,3}){3})(?!(?:169\.254|192\.168)(?:\.\d{1,3}){2})"
        r"(?!172\.(?:1[6-9]|2\d|3[0-1])(?:\.\d{1,3}){2})"
        r"(?:[1-9]\d?|1\d\d|2[01]\d|22[0-3])(?:\.(?:1?\d{1,2}|2[0-4]\d|25[0-5])){2}"
        r"(?:\.(?:[1-9]\d?|1\d\d|2[0-4]\d|25[0-4]))"
        r"|(?:(?:[a-z0-9\u00a1-\uffff][a-z0-9\u00a1-\uffff_-]{0,62})?[a-z0-9\u00a1-\uffff]\.)+"
        r"(?:[a-z\u00a1-\uffff]{2,}\.?))(?::\d{2,5})?(?:[/?#]\S*)?$",
        re.IGNORECASE,
    ),
    "PASSWORD": re.compile(
        r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&_\-.,])[A-Za-z\d@$!%*?&_\-.,]{8,}$"
    ),
}

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


def reflect_key(key: str) -> str:
    """Return the metadata-store key under which rule *key* is stored."""
    return f"{REFLECT_PREFIX}{key}"
