"""Lazily loaded project settings.

Usage:
    # In your game project's settings.py
    from troupe.conf import global_settings

    PRE_MESSAGE_COMMON_EVENT_ID = 3
    PRE_MESSAGE_SWITCH_ID = 12
    PARTY_POSITION_RULES = [
        {"actor_id": 1, "position_variable_id": 10},
        {"actor_id": 4, "presence_switch_id": 20},
    ]

    # In plugin or game code
    from troupe.conf import settings

    print(settings.PRE_MESSAGE_COMMON_EVENT_ID)  # 3
"""

import importlib
import logging
import os
from typing import Any

from troupe.conf import global_settings

logger = logging.getLogger(__name__)


class LazySettings:
    """Settings proxy that resolves the user's settings module on first access.

    Values come from two layers:
    1. global_settings (defaults shipped with troupe)
    2. The user's settings module (overrides), named by the
       TROUPE_SETTINGS_MODULE environment variable or "settings" by convention.
    """

    def __init__(self) -> None:
        """Create an unloaded proxy."""
        self._wrapped: Settings | None = None

    def _setup(self) -> None:
        """Build the settings object from defaults and the user's module."""
        settings_module = os.environ.get("TROUPE_SETTINGS_MODULE", "settings")
        self._wrapped = Settings()

        try:
            mod = importlib.import_module(settings_module)
        except ImportError:
            logger.debug("LazySettings: No settings module '%s', using defaults", settings_module)
            return

        for setting in dir(mod):
            if setting.isupper():
                setattr(self._wrapped, setting, getattr(mod, setting))

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        """Return a setting, loading the settings on first use."""
        if self._wrapped is None:
            self._setup()
        if self._wrapped is None:
            msg = "Settings could not be loaded"
            raise RuntimeError(msg)
        return getattr(self._wrapped, name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        """Override a single setting."""
        if name == "_wrapped":
            self.__dict__["_wrapped"] = value
            return
        if self._wrapped is None:
            self._setup()
        setattr(self._wrapped, name, value)

    def configure(self, **options: Any) -> None:  # noqa: ANN401
        """Set values programmatically, bypassing the user's settings module.

        Example:
            settings.configure(
                PRE_MESSAGE_COMMON_EVENT_ID=2,
                PRE_MESSAGE_SWITCH_ID=0,
            )
        """
        if self._wrapped is None:
            self._wrapped = Settings()
        for name, value in options.items():
            setattr(self._wrapped, name, value)

    def is_configured(self) -> bool:
        """Check whether settings have been loaded or configured."""
        return self._wrapped is not None


class Settings:
    """Attribute container seeded from global_settings."""

    def __init__(self) -> None:
        """Copy every uppercase default from global_settings."""
        for setting in dir(global_settings):
            if setting.isupper():
                setattr(self, setting, getattr(global_settings, setting))


settings = LazySettings()

__all__ = ["LazySettings", "Settings", "global_settings", "settings"]
