"""
Replay Commands

Parses and executes the one-line commands understood by the replay CLI:

    join USER ROOM
    contribute USER
    leave USER [ROOM]
    terminate ROOM

Blank lines and lines starting with '#' are ignored. Names follow shell quoting
rules, so a name containing whitespace (or an empty name) is written in
quotes: join "alice smith" 'team room'.
"""

import logging
import shlex
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .errors import CommandError
from .tracker import ChatTracker
from .utils.validation import validate_arity

logger = logging.getLogger(__name__)

# verb -> (min args, max args)
COMMAND_ARITY: Dict[str, Tuple[int, int]] = {
    "join": (2, 2),
    "contribute": (1, 1),
    "leave": (1, 2),
    "terminate": (1, 1),
}


@dataclass
class Command:
    """A parsed replay command."""

    verb: str
    args: List[str] = field(default_factory=list)

    def __str__(self):
        return " ".join([self.verb] + [shlex.quote(arg) for arg in self.args])


def parse_command(line: str) -> Optional[Command]:
    """
    Parse one line of a replay script.

    Args:
        line: Raw line, with or without a trailing newline

    Returns:
        The parsed Command, or None for blank and comment lines

    Raises:
        CommandError: If the quoting is unbalanced, the verb is unknown or
            the verb has the wrong arguments
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    try:
        verb, *args = shlex.split(stripped)
    except ValueError as e:
        raise CommandError(f"Cannot parse '{stripped}': {e}") from e
    verb = verb.lower()
    if verb not in COMMAND_ARITY:
        raise CommandError(f"Unknown command '{verb}'")

    minimum, maximum = COMMAND_ARITY[verb]
    is_valid, error = validate_arity(verb, args, minimum, maximum)
    if not is_valid:
        raise CommandError(error)

    return Command(verb=verb, args=args)


def _join(tracker: ChatTracker, args: List[str]) -> str:
    tracker.join(args[0], args[1])
    return "ok"


def _contribute(tracker: ChatTracker, args: List[str]) -> str:
    return str(tracker.contribute(args[0]))


def _leave(tracker: ChatTracker, args: List[str]) -> str:
    return str(tracker.leave(*args))


def _terminate(tracker: ChatTracker, args: List[str]) -> str:
    return str(tracker.terminate(args[0]))


HANDLERS: Dict[str, Callable[[ChatTracker, List[str]], str]] = {
    "join": _join,
    "contribute": _contribute,
    "leave": _leave,
    "terminate": _terminate,
}


def execute_command(tracker: ChatTracker, command: Command) -> str:
    """
    Apply a parsed command to the tracker.

    Returns:
        The printable result ("ok" for join, the integer result otherwise)
    """
    result = HANDLERS[command.verb](tracker, command.args)
    logger.debug(f"{command} -> {result}")
    return result
