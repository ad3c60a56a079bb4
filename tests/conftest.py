"""Shared pytest configuration and fixtures."""

import json
import tempfile
from collections.abc import Generator
from pathlib import Path

import arcade
import pytest

from troupe.conf import global_settings, settings

COMMON_EVENTS_DATA = [
    None,
    {
        "id": 1,
        "name": "Portrait flash",
        "list": [
            {"code": 121, "indent": 0, "parameters": [5, 5, 0]},
            {"code": 122, "indent": 0, "parameters": [7, 7, 1, 0, 1]},
            {"code": 0, "indent": 0, "parameters": []},
        ],
    },
    {"id": 2, "name": "Empty", "list": []},
]


@pytest.fixture(scope="session", autouse=True)
def _setup_arcade_resources() -> Generator[None]:
    """Register the game_assets resource handle for the whole test session.

    Points the handle at a temporary directory holding data/common_events.json
    so asset_path() and World common event loading work in tests.
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        temp_assets = Path(temp_dir)
        data_dir = temp_assets / "data"
        data_dir.mkdir(exist_ok=True)
        (data_dir / "common_events.json").write_text(json.dumps(COMMON_EVENTS_DATA))

        arcade.resources.add_resource_handle("game_assets", temp_assets.resolve())
        yield


@pytest.fixture(autouse=True)
def configure_test_settings() -> Generator[None]:
    """Configure settings with test defaults and reset them afterwards.

    Yields:
        None
    """
    settings.configure(
        FRAME_RATE=60,
        LOG_LEVEL="DEBUG",
        ASSETS_HANDLE="game_assets",
        COMMON_EVENTS_FILE="",
        PARTY_POSITION_RULES=[],
        PRE_MESSAGE_COMMON_EVENT_ID=0,
        PRE_MESSAGE_SWITCH_ID=0,
        INSTALLED_SYSTEMS=list(global_settings.INSTALLED_SYSTEMS),
    )
    yield
    settings._wrapped = None
