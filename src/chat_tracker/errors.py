"""
Exceptions for the Chat Tracker

Expected absences (unknown user, unknown room, no association) are reported
through sentinel return values, not exceptions. The classes here cover
misuse: bad construction parameters, directory corruption and malformed
replay commands.
"""


class ChatTrackerError(Exception):
    """Base class for all chat tracker errors."""


class InvalidBucketCountError(ChatTrackerError, ValueError):
    """Raised when a directory is built with an unusable bucket count."""


class DuplicateEntryError(ChatTrackerError, KeyError):
    """Raised when inserting a name that is already present in a directory."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"Entry '{self.name}' already exists"


class CommandError(ChatTrackerError, ValueError):
    """Raised when a replay command line cannot be parsed."""
