"""Plugin discovery and loading.

Discovery: entry points in the ``decval.plugins`` group, loaded through
pluggy's setuptools support, plus plugins registered directly.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from decval.model.registry import ModelEntry, bulk_model_register
from decval.plugins.hookspecs import DecvalHookSpec
from decval.validation.registry import Validation

PROJECT_NAME = "decval"
ENTRY_POINT_GROUP = "decval.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Loads plugins and feeds their validators and models to the registries.

    A broken plugin is logged and skipped; it never stops the others from
    loading.
    """

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(DecvalHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and collect their registrations.

        Returns a list of loaded plugin names.
        """
        try:
            self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        except Exception:
            logger.warning("Failed to load plugins from %s", ENTRY_POINT_GROUP, exc_info=True)
        self._normalize_plugin_instances()
        for plugin in self._pm.get_plugins():
            self._collect(plugin)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._collect(plugin)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    def _normalize_plugin_instances(self) -> None:
        """Replace plugin classes registered from entry points with instances."""
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True)
                continue
            self._pm.register(instance, name=plugin_name)

    def _collect(self, plugin: object) -> None:
        name = self._pm.get_name(plugin) or plugin.__class__.__name__
        validators = self._call(plugin, "decval_register_validators", name)
        if validators:
            try:
                Validation.register(*validators)
            except Exception:
                logger.warning("Rejected validators from plugin %s", name, exc_info=True)
        models: list[ModelEntry] = self._call(plugin, "decval_register_models", name)
        if models:
            try:
                bulk_model_register(*models)
            except Exception:
                logger.warning("Rejected models from plugin %s", name, exc_info=True)

    @staticmethod
    def _call(plugin: object, hook_name: str, plugin_name: str) -> list:
        hook = getattr(plugin, hook_name, None)
        if hook is None:
            return []
        try:
            result = hook()
        except Exception:
            logger.warning("Plugin %s failed in %s", plugin_name, hook_name, exc_info=True)
            return []
        if result is None:
            return []
        if not isinstance(result, (list, tuple)):
            logger.warning("Plugin %s returned %s from %s, expected a list", plugin_name, type(result).__name__, hook_name)
            return []
        return list(result)
