"""Loading, running and unloading of language plugins."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

log = logging.getLogger(__name__)

if sys.platform.startswith("win"):
    PLUGIN_SUFFIX = ".dll"
elif sys.platform == "darwin":
    PLUGIN_SUFFIX = ".dylib"
else:
    PLUGIN_SUFFIX = ".so"


@dataclass(frozen=True)
class ProcessedData:
    """The outcome of a plugin action; ``result_value`` is None when nothing ran."""

    result_value: Optional[str] = None


class Plugin(ABC):
    """Interface every plugin implements."""

    context: Optional[AppContext] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable plugin name."""

    def initialize(self, context: AppContext) -> bool:
        """Keep the application context; return False to refuse loading."""
        self.context = context
        return True

    def shutdown(self) -> None:
        """Drop the application context before the plugin is destroyed."""
        self.context = None

    @abstractmethod
    def perform_action(self, command: Any) -> ProcessedData:
        """Run ``command`` and report the result."""


@dataclass(frozen=True)
class PluginFactory:
    """How to create a plugin instance and, optionally, how to dispose of it."""

    create: Callable[[AppContext], Optional[Plugin]]
    destroy: Optional[Callable[[Plugin], None]] = None

    def dispose(self, plugin: Plugin) -> None:
        """Call the destroy hook if one was given."""
        if self.destroy is not None:
            self.destroy(plugin)


@dataclass
class AppContext:
    """Application data shared with plugins."""

    search_path: Path = field(default_factory=Path)
    plugins: dict[str, PluginFactory] = field(default_factory=dict)
    user_data_path: Optional[Path] = None
    user_path: Optional[Path] = None


class PluginLoadError(Exception):
    """A plugin could not be created or initialised."""


@dataclass
class _LoadedPlugin:
    name: str
    instance: Plugin
    factory: PluginFactory


class PluginManager:
    """Keeps the loaded plugins and forwards actions to them."""

    def __init__(self, context: AppContext) -> None:
        self.context = context
        self._plugins: list[_LoadedPlugin] = []

    def __len__(self) -> int:
        return len(self._plugins)

    def load_plugin(self, plugin_name: str) -> Plugin:
        """Create and initialise the plugin registered as ``plugin_name``."""
        try:
            factory = self.context.plugins[plugin_name]
        except KeyError:
            raise PluginLoadError(f"No plugin registered as {plugin_name!r}") from None

        instance = factory.create(self.context)
        if instance is None:
            raise PluginLoadError(f"Plugin {plugin_name!r} could not be created")

        if not instance.initialize(self.context):
            log.error("Plugin initialization failed for: %s from %s", instance.name, plugin_name)
            factory.dispose(instance)
            raise PluginLoadError(f"Plugin initialization failed for: {instance.name}")

        self._plugins.append(_LoadedPlugin(plugin_name, instance, factory))
        return instance

    def unload_all_plugins(self) -> None:
        """Shut down and destroy every plugin, newest first."""
        for loaded in reversed(self._plugins):
            loaded.instance.shutdown()
            loaded.factory.dispose(loaded.instance)
        self._plugins.clear()

    def load_plugins_from_directory(self, directory_path: str | Path) -> list[str]:
        """Load every registered plugin that has a library file in the directory.

        Returns the names of the plugins that were loaded.
        """
        directory = Path(directory_path)
        log.info("Scanning for plugins in directory: %s", directory)
        if not directory.is_dir():
            raise NotADirectoryError(
                f"Plugin directory does not exist or is not a directory: {directory}"
            )

        loaded: list[str] = []
        for entry in sorted(directory.iterdir()):
            if not entry.is_file() or entry.suffix != PLUGIN_SUFFIX:
                continue
            if entry.stem not in self.context.plugins:
                continue
            try:
                self.load_plugin(entry.stem)
            except PluginLoadError as exc:
                log.error("Failed to load plugin %s: %s", entry, exc)
            else:
                loaded.append(entry.stem)
        return loaded

    def call_perform_action(self, command: Any) -> ProcessedData:
        """Run ``command`` with the first loaded plugin."""
        if not self._plugins:
            return ProcessedData()
        return self._plugins[0].instance.perform_action(command)

    def __enter__(self) -> PluginManager:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unload_all_plugins()