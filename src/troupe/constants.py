"""Asset path resolution.

Data files (the common event database, for instance) are looked up through
Arcade's resource handle system, which resolves the same way in development and
in PyInstaller bundles.
"""

import arcade

from troupe.conf import settings


def asset_path(relative_path: str, assets_handle: str | None = None) -> str:
    """Get the resolved absolute path for an asset file.

    Args:
        relative_path: Path relative to the assets directory (e.g., "data/common_events.json").
        assets_handle: Name of the resource handle. If None, uses settings.ASSETS_HANDLE.

    Returns:
        Absolute file path as string.

    Example:
        >>> asset_path("data/common_events.json")
        "/absolute/path/to/assets/data/common_events.json"
    """
    if assets_handle is None:
        assets_handle = settings.ASSETS_HANDLE

    relative_path = relative_path.lstrip("/")
    return str(arcade.resources.resolve(f":{assets_handle}:/{relative_path}"))
