"""Loader for pluggable systems."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from troupe.systems.registry import SystemRegistry

if TYPE_CHECKING:
    from troupe.conf import LazySettings
    from troupe.systems.base import BaseSystem
    from troupe.systems.game_context import GameContext

logger = logging.getLogger(__name__)


class MissingDependencyError(Exception):
    """Raised when a system depends on a system that is not installed."""


class CircularDependencyError(Exception):
    """Raised when system dependencies form a cycle."""


class SystemLoader:
    """Loads and drives system instances.

    The SystemLoader handles:
    1. Importing the modules listed in INSTALLED_SYSTEMS so their systems register
    2. Instantiating the registered systems that belong to those modules
    3. Ordering them so every system comes after its dependencies
    4. Calling setup(), update() and cleanup() on all of them in that order
    """

    def __init__(self, settings: LazySettings) -> None:
        """Initialize the loader.

        Args:
            settings: Project settings providing INSTALLED_SYSTEMS.
        """
        self.settings = settings
        self._instances: dict[str, BaseSystem] = {}
        self._load_order: list[str] = []

    @property
    def load_order(self) -> list[str]:
        """Names of the instantiated systems in dependency order."""
        return list(self._load_order)

    def load_modules(self) -> list[str]:
        """Import every installed system module.

        Returns:
            The installed module paths.
        """
        installed = list(self.settings.INSTALLED_SYSTEMS or [])
        for module_path in installed:
            try:
                importlib.import_module(module_path)
                logger.debug("Loaded system module: %s", module_path)
            except ImportError:
                logger.exception("Could not load system module '%s'", module_path)
                raise
        return installed

    def instantiate_all(self) -> dict[str, BaseSystem]:
        """Create one instance of every installed system.

        Returns:
            Dictionary mapping system names to their instances, in load order.

        Raises:
            MissingDependencyError: If a dependency is not installed.
            CircularDependencyError: If dependencies form a cycle.
        """
        installed = self.load_modules()
        candidates = {
            name: system_class
            for name, system_class in SystemRegistry.get_all().items()
            if any(
                system_class.__module__ == module_path or system_class.__module__.startswith(module_path + ".")
                for module_path in installed
            )
        }
        if not candidates:
            logger.warning("No systems registered")
            return {}

        self._load_order = self._resolve_order(candidates)
        self._instances = {name: candidates[name]() for name in self._load_order}
        logger.info("Instantiated %d systems: %s", len(self._instances), ", ".join(self._load_order))
        return dict(self._instances)

    def _resolve_order(self, candidates: dict[str, type[BaseSystem]]) -> list[str]:
        """Sort system names so dependencies come first."""
        order: list[str] = []
        visiting: set[str] = set()

        def visit(name: str, chain: list[str]) -> None:
            if name in order:
                return
            if name in visiting:
                msg = f"Circular system dependency: {' -> '.join([*chain, name])}"
                raise CircularDependencyError(msg)
            visiting.add(name)
            for dependency in candidates[name].dependencies:
                if dependency not in candidates:
                    msg = f"System '{name}' depends on '{dependency}', which is not installed"
                    raise MissingDependencyError(msg)
                visit(dependency, [*chain, name])
            visiting.discard(name)
            order.append(name)

        for name in sorted(candidates):
            visit(name, [])
        return order

    def setup_all(self, context: GameContext) -> None:
        """Set up every system in load order."""
        for name in self._load_order:
            self._instances[name].setup(context, self.settings)
            logger.debug("Set up system: %s", name)

    def update_all(self, delta_time: float, context: GameContext) -> None:
        """Update every system in load order."""
        for name in self._load_order:
            self._instances[name].update(delta_time, context)

    def cleanup_all(self) -> None:
        """Clean up every system in reverse load order."""
        for name in reversed(self._load_order):
            self._instances[name].cleanup()
        logger.debug("Cleaned up %d systems", len(self._load_order))

    def get_system(self, name: str) -> BaseSystem | None:
        """Get a system instance by name."""
        return self._instances.get(name)
