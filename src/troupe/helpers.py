"""Helper functions for creating troupe worlds.

create_world() is the usual entry point: it configures logging and resource
handles from settings and returns a World that is already set up.
"""

import logging
from pathlib import Path

import arcade
from rich.logging import RichHandler

from troupe.conf import settings
from troupe.world import World


def setup_logging(log_level: str = "DEBUG") -> None:
    """Configure logging for the game.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Side effects:
        - Configures the root logger with RichHandler
        - Sets the specified log level
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, markup=True)],
    )


def setup_resources(assets_handle: str, assets_dir: Path | None = None) -> None:
    """Register an Arcade resource handle for data files.

    Args:
        assets_handle: Name of the resource handle to register.
        assets_dir: Directory the handle points to. Defaults to ./assets.
    """
    if assets_dir is None:
        assets_dir = Path.cwd() / "assets"
    arcade.resources.add_resource_handle(assets_handle, assets_dir.resolve())


def create_world() -> World:
    """Create a World from the project's settings.

    Uses the settings from your project's settings.py (or the module named by
    TROUPE_SETTINGS_MODULE), sets up logging and the assets resource handle,
    loads the installed systems and returns the ready world.

    Example:
        >>> from troupe import create_world
        >>> world = create_world()
        >>> world.party.add_actor(1)
        >>> world.run_frames(1)
    """
    setup_logging(settings.LOG_LEVEL)
    setup_resources(settings.ASSETS_HANDLE)

    world = World(settings)
    world.setup()
    return world
