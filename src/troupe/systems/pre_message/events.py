"""Events for the pre-message system."""

from dataclasses import dataclass

from troupe.events import Event


@dataclass
class PreMessageStartedEvent(Event):
    """Fired when the pre-message common event is launched for a held message.

    Attributes:
        common_event_id: Common event that was launched.
        event_id: Id of the event owning the interpreter whose message is held.
    """

    common_event_id: int
    event_id: int


@dataclass
class PreMessageFinishedEvent(Event):
    """Fired when the pre-message common event is seen to have finished.

    The held message runs on the interpreter's next dispatch attempt.

    Attributes:
        common_event_id: Common event that finished.
        event_id: Id of the event owning the interpreter whose message is held.
    """

    common_event_id: int
    event_id: int
