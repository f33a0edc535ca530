"""Validation rule records.

A :class:`ValidationRule` is the metadata attached to one property by one
rule builder: a rule-kind *key* plus its parameters. Rules are immutable and
are read by the engine on every validation run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True, eq=True)
class ValidationRule:
    """One declared rule on one property.

    Attributes:
        key: Rule kind, e.g. ``"required"`` or ``"minlength"``.
        props: Rule parameters handed to the validator as its options.
    """

    key: str
    props: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", str(self.key))
        object.__setattr__(self, "props", MappingProxyType(dict(self.props)))

    @property
    def is_async(self) -> bool:
        return bool(self.props.get("async", False))

    @property
    def types(self) -> tuple[str, ...]:
        """Type names this rule enforces (empty if it enforces none)."""
        raw = self.props.get("types")
        if raw is None:
            return ()
        if isinstance(raw, str):
            return (raw,)
        return tuple(raw)

    def with_props(self, **changes: Any) -> ValidationRule:
        return ValidationRule(self.key, {**self.props, **changes})
