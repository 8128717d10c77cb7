"""
User and Room Entities

This module holds the two entity types the tracker owns. A user keeps an
ordered history of the rooms it has joined and not left, most recent
first; the head of that history is the user's current room. A room keeps
its members and a running total of every contribution made to it.

Entities reference each other directly. They are only ever handed to one
another by the tracker, which resolves names first, so every method here
can assume it receives a live entity.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Sentinel results shared with the tracker
NO_CONTRIBUTIONS = 0
NOT_ASSOCIATED = -1


@dataclass(eq=False)
class ChatEntry:
    """
    One line of a user's history.

    Attributes:
        room: The joined room
        contributions: Contributions this user made to the room since joining
    """

    room: "Room" = field(repr=False)
    contributions: int = 0


@dataclass(eq=False)
class Room:
    """
    Represents a chat room.

    Attributes:
        name: Unique name of the room
        members: Dict of username -> User for users currently joined
        total_contributions: Every contribution ever recorded to this room
    """

    name: str
    members: Dict[str, "User"] = field(default_factory=dict, repr=False)
    total_contributions: int = 0

    def add_member(self, user: "User"):
        """Note user as a member of the room."""
        self.members[user.name] = user

    def remove_member(self, user: "User"):
        """Forget a member. Missing members are ignored."""
        self.members.pop(user.name, None)

    def record_contribution(self):
        self.total_contributions += 1

    def terminate(self) -> int:
        """
        Make every member leave this room.

        Returns:
            The total number of contributions made to the room
        """
        for member in list(self.members.values()):
            member.leave_room(self)
        logger.debug(
            f"Room '{self.name}' detached {len(self.members)} member(s)"
        )
        self.members.clear()
        return self.total_contributions

    def member_names(self) -> List[str]:
        return sorted(self.members)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "members": self.member_names(),
            "member_count": len(self.members),
            "total_contributions": self.total_contributions,
        }


@dataclass(eq=False)
class User:
    """
    Represents a user and the rooms it belongs to.

    Attributes:
        name: Unique name of the user
        history: Room name -> ChatEntry, ordered most recently joined first
    """

    name: str
    history: "OrderedDict[str, ChatEntry]" = field(
        default_factory=OrderedDict, repr=False
    )

    @property
    def current_room(self) -> Optional[Room]:
        """The most recently joined room not yet left, if any."""
        if not self.history:
            return None
        return next(iter(self.history.values())).room

    def _entry_for(self, room: Room) -> Optional[ChatEntry]:
        entry = self.history.get(room.name)
        # Entries match by identity, not by name alone; ChatTracker never
        # leaves a stale entry behind, but direct entity callers may
        if entry is None or entry.room is not room:
            return None
        return entry

    def join_room(self, room: Room):
        """
        Make room the current room.

        Rejoining a room already in the history moves it to the front and
        keeps the contribution count. Otherwise the room is added at the
        front with a count of zero and the user becomes one of its members.
        """
        if self._entry_for(room) is not None:
            self.history.move_to_end(room.name, last=False)
            logger.debug(f"User '{self.name}' switched back to '{room.name}'")
            return

        self.history[room.name] = ChatEntry(room=room)
        self.history.move_to_end(room.name, last=False)
        room.add_member(self)
        logger.debug(f"User '{self.name}' joined '{room.name}'")

    def leave_room(self, room: Room) -> int:
        """
        Remove room from the history, wherever it sits.

        The room's own total is left unchanged, and so is its member set.

        Returns:
            The user's contribution count for the room, or NOT_ASSOCIATED
        """
        entry = self._entry_for(room)
        if entry is None:
            return NOT_ASSOCIATED

        del self.history[room.name]
        logger.debug(f"User '{self.name}' left '{room.name}'")
        return entry.contributions

    def leave_current_room(self) -> int:
        """
        Leave the current room; the next most recent one becomes current.

        Returns:
            The contribution count for the room left, or NOT_ASSOCIATED if
            the user has no current room
        """
        room = self.current_room
        if room is None:
            return NOT_ASSOCIATED
        return self.leave_room(room)

    def contribute_to_current_room(self) -> int:
        """
        Credit one contribution to the current room.

        Returns:
            The user's new count for the current room, or NO_CONTRIBUTIONS
            if the user has no current room
        """
        if not self.history:
            return NO_CONTRIBUTIONS

        entry = next(iter(self.history.values()))
        entry.room.record_contribution()
        entry.contributions += 1
        return entry.contributions

    def contributions_to(self, room: Room) -> int:
        entry = self._entry_for(room)
        return NOT_ASSOCIATED if entry is None else entry.contributions

    def room_names(self) -> List[str]:
        """Names of joined rooms, current room first."""
        return list(self.history)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        current = self.current_room
        return {
            "name": self.name,
            "current_room": current.name if current is not None else None,
            "rooms": [
                {"room": name, "contributions": entry.contributions}
                for name, entry in self.history.items()
            ],
        }
