"""Pluggy hook specifications for decval extensions.

Plugins contribute validators and models at discovery time.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("decval")
hookimpl = pluggy.HookimplMarker("decval")


class DecvalHookSpec:
    """Hook specifications for the decval plugin system."""

    @hookspec
    def decval_register_validators(self) -> list[Any] | None:
        """Return validators to add to the validator registry.

        Entries follow :meth:`ValidatorRegistry.register`: validator classes
        or instances declaring ``keys``, or ``ValidatorDefinition`` records.
        Keys that are already taken are skipped.
        """

    @hookspec
    def decval_register_models(self) -> list[Any] | None:
        """Return model classes, or ``(name, class)`` pairs, to register."""
