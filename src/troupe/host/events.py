"""Events published by the host stores."""

from dataclasses import dataclass

from troupe.events import Event


@dataclass
class VariableChangedEvent(Event):
    """Fired on every variable write, even when the value is unchanged.

    Consumers typically re-evaluate event page conditions on this signal, which
    is why writers should avoid redundant writes.

    Attributes:
        variable_id: Id of the written variable.
        value: Value after the write.
    """

    variable_id: int
    value: int


@dataclass
class SwitchChangedEvent(Event):
    """Fired on every switch write, even when the value is unchanged.

    Attributes:
        switch_id: Id of the written switch.
        value: Value after the write.
    """

    switch_id: int
    value: bool
