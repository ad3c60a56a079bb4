"""Events published by the command interpreter."""

from dataclasses import dataclass, field

from troupe.events import Event


@dataclass
class MessageShownEvent(Event):
    """Fired when a show text command runs.

    Displaying the message is up to whoever subscribes; the interpreter only
    announces it.

    Attributes:
        event_id: Id of the event that owns the running interpreter (0 for none).
        face_name: Face graphic name.
        face_index: Face graphic index.
        background: Window background type.
        position: Window position type.
        lines: Text lines gathered from the following text line commands.
    """

    event_id: int
    face_name: str = ""
    face_index: int = 0
    background: int = 0
    position: int = 2
    lines: list[str] = field(default_factory=list)
