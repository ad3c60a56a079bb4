"""Common event database.

Common events are named, reusable command lists that an interpreter can run as a
child. The database is loaded from a JSON array indexed by id, the same shape the
engine exports:

    [
        null,
        {"id": 1, "name": "Face flash", "list": [
            {"code": 121, "indent": 0, "parameters": [5, 5, 0]},
            {"code": 0, "indent": 0, "parameters": []}
        ]}
    ]

Index 0 and holes are null. Entries that are not mappings are skipped.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from troupe.conf.coerce import to_int
from troupe.interpreter.commands import EventCommand, parse_commands

logger = logging.getLogger(__name__)


@dataclass
class CommonEvent:
    """A reusable command list.

    Attributes:
        id: Positive identifier.
        name: Editor name, informational only.
        commands: Commands to run.
    """

    id: int
    name: str = ""
    commands: list[EventCommand] = field(default_factory=list)


class CommonEventDatabase:
    """Registry of common events by id."""

    def __init__(self) -> None:
        """Initialize an empty database."""
        self._events: dict[int, CommonEvent] = {}

    def add(self, common_event: CommonEvent) -> None:
        """Register common_event, replacing any event with the same id."""
        self._events[common_event.id] = common_event

    def get(self, common_event_id: int) -> CommonEvent | None:
        """Return the common event with this id, or None."""
        return self._events.get(common_event_id)

    def commands_for(self, common_event_id: int) -> list[EventCommand] | None:
        """Return the commands of a common event, or None if it does not exist."""
        common_event = self.get(common_event_id)
        return common_event.commands if common_event else None

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Remove every common event."""
        self._events.clear()

    def load_file(self, path: str | Path) -> None:
        """Load common events from a JSON file.

        A missing or unreadable file is logged and leaves the database unchanged.

        Args:
            path: Path of the JSON file.
        """
        full_path = Path(path)
        if not full_path.exists():
            logger.error("CommonEventDatabase: File not found: %s", path)
            return
        try:
            with full_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.exception("CommonEventDatabase: Failed to read %s", path)
            return

        self.load_data(data)
        logger.info("CommonEventDatabase: Loaded %d common events from %s", len(self._events), path)

    def load_data(self, data: Any) -> None:  # noqa: ANN401
        """Load common events from already parsed JSON data.

        Args:
            data: List indexed by id; entries are mappings with "id", "name" and "list".
        """
        if not isinstance(data, list):
            logger.warning("CommonEventDatabase: Expected a list of common events, got %s", type(data).__name__)
            return

        for index, entry in enumerate(data):
            if entry is None:
                continue
            if not isinstance(entry, dict):
                logger.warning("CommonEventDatabase: Skipping malformed entry at index %d", index)
                continue
            event_id = to_int(entry.get("id"), default=index)
            if event_id <= 0:
                logger.warning("CommonEventDatabase: Skipping entry with invalid id at index %d", index)
                continue
            self.add(
                CommonEvent(
                    id=event_id,
                    name=str(entry.get("name", "")),
                    commands=parse_commands(entry.get("list")),
                )
            )
