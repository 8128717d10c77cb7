"""
Chat Tracker Package

This package tracks users, the chat rooms they join and the contributions
they make, using a "most recent join is current" history per user and a
running contribution total per room.
"""

from .commands import Command, execute_command, parse_command
from .directory import HashDirectory, bucket_for
from .entities import NO_CONTRIBUTIONS, NOT_ASSOCIATED
from .errors import (
    ChatTrackerError,
    CommandError,
    DuplicateEntryError,
    InvalidBucketCountError,
)
from .tracker import DEFAULT_BUCKET_COUNT, ChatTracker

__all__ = [
    "ChatTracker",
    "HashDirectory",
    "bucket_for",
    "Command",
    "parse_command",
    "execute_command",
    "ChatTrackerError",
    "CommandError",
    "DuplicateEntryError",
    "InvalidBucketCountError",
    "DEFAULT_BUCKET_COUNT",
    "NO_CONTRIBUTIONS",
    "NOT_ASSOCIATED",
]
