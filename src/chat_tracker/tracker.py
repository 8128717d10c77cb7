"""
Chat Tracker

This module provides the tracker that owns every user and room, resolves
names through two hash directories and applies the join, leave,
contribute and terminate operations.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

from .directory import HashDirectory
from .entities import NO_CONTRIBUTIONS, NOT_ASSOCIATED, Room, User

logger = logging.getLogger(__name__)

# Configuration constants
DEFAULT_BUCKET_COUNT = 997  # buckets per directory when none is given


class ChatTracker:
    """
    Tracks users, rooms and contributions.

    Every public operation holds a single lock for its whole duration, so
    the tracker can be shared between threads. Unknown users or rooms are
    never an error: they are reported through NO_CONTRIBUTIONS (0) or
    NOT_ASSOCIATED (-1) depending on the operation.
    """

    def __init__(self, bucket_count: int = DEFAULT_BUCKET_COUNT):
        """
        Initialize an empty tracker.

        Args:
            bucket_count: Number of buckets used by both the user and the
                room directory

        Raises:
            InvalidBucketCountError: If bucket_count is not a positive integer
        """
        self._users: HashDirectory[User] = HashDirectory(bucket_count, "user")
        self._rooms: HashDirectory[Room] = HashDirectory(bucket_count, "room")
        self._lock = threading.RLock()
        logger.info(f"ChatTracker initialized with {bucket_count} buckets")

    @property
    def bucket_count(self) -> int:
        return self._users.bucket_count

    # Operations

    def join(self, user: str, room: str) -> None:
        """
        Make room the current room of user.

        Missing rooms and users are created, the room first. If the user
        already belongs to the room, its contribution count is kept and the
        room simply becomes current again.

        Args:
            user: Name of the user
            room: Name of the room
        """
        with self._lock:
            room_obj = self._rooms.find(room)
            if room_obj is None:
                room_obj = Room(name=room)
                self._rooms.insert(room, room_obj)
                logger.info(f"Created room '{room}'")

            user_obj = self._users.find(user)
            if user_obj is None:
                user_obj = User(name=user)
                self._users.insert(user, user_obj)
                logger.info(f"Created user '{user}'")

            user_obj.join_room(room_obj)

    def terminate(self, room: str) -> int:
        """
        Destroy a room, making all of its members leave it.

        Members whose current room it was fall back to the room they most
        recently joined and have not left, or to no room at all.

        Args:
            room: Name of the room

        Returns:
            Total contributions ever made to the room, 0 if it doesn't exist
        """
        with self._lock:
            room_obj = self._rooms.find(room)
            if room_obj is None:
                logger.debug(f"Cannot terminate: Room '{room}' not found")
                return NO_CONTRIBUTIONS

            members = len(room_obj.members)
            total = room_obj.terminate()
            self._rooms.remove(room)
            logger.info(
                f"Terminated room '{room}' ({members} member(s), "
                f"{total} contribution(s))"
            )
            return total

    def contribute(self, user: str) -> int:
        """
        Credit one contribution from user to its current room.

        Args:
            user: Name of the user

        Returns:
            The user's new contribution count for its current room, or 0 if
            the user doesn't exist or has no current room
        """
        with self._lock:
            user_obj = self._users.find(user)
            if user_obj is None:
                logger.debug(f"Cannot contribute: User '{user}' not found")
                return NO_CONTRIBUTIONS

            count = user_obj.contribute_to_current_room()
            logger.debug(f"User '{user}' contributed (count={count})")
            return count

    def leave(self, user: str, room: Optional[str] = None) -> int:
        """
        Make user leave a room.

        With room omitted the user leaves its current room. Either way, if
        the room left was current, the most recently joined room not yet
        left becomes current. The room's total is not changed.

        Args:
            user: Name of the user
            room: Name of the room, or None for the current room

        Returns:
            The user's contribution count for the room left, or -1 if the
            user, the room or the association doesn't exist
        """
        with self._lock:
            user_obj = self._users.find(user)
            if user_obj is None:
                logger.debug(f"Cannot leave: User '{user}' not found")
                return NOT_ASSOCIATED

            if room is None:
                room_obj = user_obj.current_room
                if room_obj is None:
                    logger.debug(f"Cannot leave: User '{user}' has no room")
                    return NOT_ASSOCIATED
                count = user_obj.leave_current_room()
            else:
                room_obj = self._rooms.find(room)
                if room_obj is None:
                    logger.debug(f"Cannot leave: Room '{room}' not found")
                    return NOT_ASSOCIATED
                count = user_obj.leave_room(room_obj)

            if count == NOT_ASSOCIATED:
                logger.warning(
                    f"User '{user}' is not a member of room '{room_obj.name}'"
                )
                return NOT_ASSOCIATED

            room_obj.remove_member(user_obj)
            return count

    # Queries

    def current_room(self, user: str) -> Optional[str]:
        """Get the name of user's current room, or None."""
        with self._lock:
            user_obj = self._users.find(user)
            if user_obj is None or user_obj.current_room is None:
                return None
            return user_obj.current_room.name

    def rooms_of(self, user: str) -> List[str]:
        """Get the rooms user belongs to, current room first."""
        with self._lock:
            user_obj = self._users.find(user)
            return user_obj.room_names() if user_obj else []

    def members_of(self, room: str) -> List[str]:
        """Get the sorted member names of a room."""
        with self._lock:
            room_obj = self._rooms.find(room)
            return room_obj.member_names() if room_obj else []

    def total_contributions(self, room: str) -> int:
        """Get a room's running total without terminating it."""
        with self._lock:
            room_obj = self._rooms.find(room)
            return room_obj.total_contributions if room_obj else 0

    def has_user(self, user: str) -> bool:
        with self._lock:
            return user in self._users

    def has_room(self, room: str) -> bool:
        with self._lock:
            return room in self._rooms

    @property
    def user_count(self) -> int:
        return len(self._users)

    @property
    def room_count(self) -> int:
        return len(self._rooms)

    def snapshot(self) -> Dict[str, Any]:
        """
        Describe the whole tracker state.

        Returns:
            Dict with sorted "users" and "rooms" lists of entity dicts
        """
        with self._lock:
            users = sorted(self._users, key=lambda u: u.name)
            rooms = sorted(self._rooms, key=lambda r: r.name)
            return {
                "users": [u.to_dict() for u in users],
                "rooms": [r.to_dict() for r in rooms],
            }

    # Teardown

    def close(self):
        """Release every user and room."""
        with self._lock:
            rooms = self._rooms.clear()
            users = self._users.clear()
            for room_obj in rooms:
                room_obj.members.clear()
            for user_obj in users:
                user_obj.history.clear()
            logger.info(
                f"ChatTracker closed ({len(users)} user(s), "
                f"{len(rooms)} room(s) released)"
            )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
