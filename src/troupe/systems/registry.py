"""Registry of system classes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from troupe.systems.base import BaseSystem

logger = logging.getLogger(__name__)


class SystemRegistry:
    """Central registry of system classes.

    Systems register themselves with the @SystemRegistry.register decorator when
    their module is imported. SystemLoader imports the modules listed in
    INSTALLED_SYSTEMS and then instantiates what got registered.
    """

    _systems: ClassVar[dict[str, type[BaseSystem]]] = {}

    @classmethod
    def register(cls, system_class: type[BaseSystem]) -> type[BaseSystem]:
        """Register a system class.

        Use as a decorator:
            @SystemRegistry.register
            class MySystem(BaseSystem):
                name = "my_system"
                ...

        Args:
            system_class: The system class to register.

        Returns:
            The same class.

        Raises:
            ValueError: If the class has no name.
        """
        name = getattr(system_class, "name", None)
        if not name:
            msg = f"System {system_class.__name__} must have a 'name' class attribute"
            raise ValueError(msg)

        if name in cls._systems and cls._systems[name] is not system_class:
            logger.warning("Re-registering system: %s", name)

        cls._systems[name] = system_class
        logger.debug("Registered system: %s", name)
        return system_class

    @classmethod
    def get(cls, name: str) -> type[BaseSystem] | None:
        """Get a registered system class by name."""
        return cls._systems.get(name)

    @classmethod
    def get_all(cls) -> dict[str, type[BaseSystem]]:
        """Get all registered system classes."""
        return cls._systems.copy()

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a system is registered."""
        return name in cls._systems

    @classmethod
    def unregister(cls, name: str) -> None:
        """Remove a system class (for testing)."""
        cls._systems.pop(name, None)
