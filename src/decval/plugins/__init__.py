"""Extension layer — plugin system via pluggy.

INVARIANT: Plugin failures are warnings, never errors.
"""

from decval.plugins.hookspecs import hookimpl
from decval.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
