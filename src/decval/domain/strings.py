"""String formatting helpers."""

from __future__ import annotations

import re

_PLACEHOLDER = re.compile(r"\{(\d+)\}")


def sf(template: str, *args: object) -> str:
    """Substitute positional ``{n}`` placeholders in *template*.

    Placeholders without a matching argument are left untouched, so a
    message can be partially formatted and completed later.
    """

    def _replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(args):
            return str(args[index])
        return match.group(0)

    return _PLACEHOLDER.sub(_replace, template)
