"""Party roster."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartyMember:
    """One actor in the party.

    Attributes:
        actor_id: Id of the actor definition this member was created from.
        name: Display name, informational only.
    """

    actor_id: int
    name: str = ""


class Party:
    """Ordered list of active party members. Index 0 is the leader.

    The party also knows whether a battle is running, since tracking systems
    skip their work while one is.

    Example usage:
        party = Party()
        party.add_actor(1, "Harold")
        party.add_actor(4, "Lucius")
        party.swap_order(0, 1)
        [m.actor_id for m in party.members()]  # [4, 1]
    """

    def __init__(self, members: list[PartyMember] | None = None) -> None:
        """Initialize the party.

        Args:
            members: Initial members in marching order.
        """
        self._members: list[PartyMember] = list(members or [])
        self._in_battle = False

    def members(self) -> list[PartyMember]:
        """Return a snapshot of the members in marching order."""
        return list(self._members)

    def size(self) -> int:
        """Return the number of members."""
        return len(self._members)

    def leader(self) -> PartyMember | None:
        """Return the first member, or None for an empty party."""
        return self._members[0] if self._members else None

    def has_actor(self, actor_id: int) -> bool:
        """Check whether actor_id is in the party."""
        return any(member.actor_id == actor_id for member in self._members)

    def add_actor(self, actor_id: int, name: str = "") -> None:
        """Append actor_id to the end of the party unless it is already a member."""
        if self.has_actor(actor_id):
            logger.debug("Party: Actor %d already in party", actor_id)
            return
        self._members.append(PartyMember(actor_id, name))
        logger.debug("Party: Actor %d joined at slot %d", actor_id, len(self._members))

    def remove_actor(self, actor_id: int) -> None:
        """Remove actor_id from the party. Unknown actors are ignored."""
        self._members = [member for member in self._members if member.actor_id != actor_id]

    def swap_order(self, index1: int, index2: int) -> None:
        """Swap the members at two slots."""
        self._members[index1], self._members[index2] = self._members[index2], self._members[index1]

    def in_battle(self) -> bool:
        """Return True while a battle is running."""
        return self._in_battle

    def on_battle_start(self) -> None:
        """Mark the start of a battle."""
        self._in_battle = True

    def on_battle_end(self) -> None:
        """Mark the end of a battle."""
        self._in_battle = False
