"""Immutable validation report."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

PropertyErrors = Mapping[str, str]


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


class ModelErrorDefinition(Mapping[str, Any]):
    """Errors of one validation run, keyed by property path.

    Values are ``{rule key: message}`` mappings, or for collection
    properties a tuple holding one mapping (or ``None``) per element.
    Nested model errors use dotted keys such as ``"address.street"``.

    Example::

        errors = user.has_errors()
        if errors:
            errors["name"]["minlength"]  # "The minimum length is 3"
            errors.name                  # same mapping, attribute style
    """

    __slots__ = ("_errors",)

    def __init__(self, errors: Mapping[str, Any]) -> None:
        object.__setattr__(self, "_errors", MappingProxyType({k: _freeze(v) for k, v in errors.items() if v}))

    def __getitem__(self, key: str) -> Any:
        return self._errors[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._errors[name]
        except KeyError:
            raise AttributeError(name) from None

    def __setattr__(self, name: str, value: Any) -> None:
        msg = "ModelErrorDefinition is immutable"
        raise AttributeError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Plain ``dict``/``list`` copy of the report."""
        return {k: _thaw(v) for k, v in self._errors.items()}

    def messages(self) -> list[tuple[str, str]]:
        """Flat ``(property path, message)`` pairs, element indices included."""
        lines: list[tuple[str, str]] = []
        for prop, value in self._errors.items():
            if isinstance(value, tuple):
                for index, element in enumerate(value):
                    for message in (element or {}).values():
                        lines.append((f"{prop}.{index}", message))
            else:
                lines.extend((prop, message) for message in value.values())
        return lines

    def __str__(self) -> str:
        return "\n".join(f"{prop} - {message}" for prop, message in self.messages())

    def __repr__(self) -> str:
        return f"ModelErrorDefinition({self.to_dict()!r})"
