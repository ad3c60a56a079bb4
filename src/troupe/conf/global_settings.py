"""Default settings for troupe.

Projects override these in their own settings.py.

Example:
    # In your project's settings.py:
    from troupe.conf import global_settings

    PRE_MESSAGE_COMMON_EVENT_ID = 5
    INSTALLED_SYSTEMS = [
        *global_settings.INSTALLED_SYSTEMS,
        "myproject.systems.weather",
    ]
"""

# Runtime settings
FRAME_RATE = 60
"""Number of world updates per second assumed by World.run_frames()."""

LOG_LEVEL = "INFO"
"""Level passed to setup_logging() by create_world()."""

# Asset settings
ASSETS_HANDLE = "game_assets"
"""Resource handle name for data file lookup."""

COMMON_EVENTS_FILE = ""
"""Path of the common event database relative to the assets directory (empty string for none)."""

# Party position settings
PARTY_POSITION_RULES = []
"""Tracked actors, as a list of mappings or a JSON string of the same list.

Each entry has "actor_id" plus at least one of "position_variable_id" and
"presence_switch_id". Entries without a positive actor id or without any
enabled output are dropped when the system loads.
"""

# Pre-message settings
PRE_MESSAGE_COMMON_EVENT_ID = 0
"""Common event to run before every show text command (0 disables)."""

PRE_MESSAGE_SWITCH_ID = 0
"""Switch that must be ON for the pre-message common event to run (0 means always)."""

# Installed systems
INSTALLED_SYSTEMS = [
    "troupe.systems.party_position",
    "troupe.systems.pre_message",
]
"""Module paths imported at startup so their systems register themselves."""
