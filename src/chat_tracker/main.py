#!/usr/bin/env python3
"""
Chat Tracker Replay CLI

Replays a script of tracker commands from a file, or from standard input
when no file is given, and prints the result of each one. The output
format belongs to this driver only; ChatTracker itself returns plain
integers and never formats anything.
"""

import argparse
import logging
import os
import sys
from typing import Iterable, Optional, TextIO

from .commands import execute_command, parse_command
from .errors import ChatTrackerError, CommandError
from .tracker import DEFAULT_BUCKET_COUNT, ChatTracker

logger = logging.getLogger(__name__)


def replay(tracker: ChatTracker, lines: Iterable[str], out: TextIO) -> int:
    """
    Execute every command in lines against tracker.

    Args:
        tracker: The tracker to drive
        lines: Script lines
        out: Stream receiving one "<command> -> <result>" line per command

    Returns:
        Number of commands executed

    Raises:
        CommandError: On the first malformed line, with its line number
    """
    executed = 0
    for line_number, line in enumerate(lines, start=1):
        try:
            command = parse_command(line)
        except CommandError as e:
            raise CommandError(f"line {line_number}: {e}") from e
        if command is None:
            continue
        result = execute_command(tracker, command)
        out.write(f"{command} -> {result}\n")
        executed += 1
    return executed


def main(argv: Optional[list] = None):
    """Main entry point for the replay CLI."""
    parser = argparse.ArgumentParser(
        prog="chat-tracker",
        description="Replay a script of chat tracker commands",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Command script to replay (standard input when omitted)",
    )
    args = parser.parse_args(argv)

    log_level = os.environ.get("CHAT_TRACKER_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(log_level), int):
        print(
            f"Error: CHAT_TRACKER_LOG_LEVEL '{log_level}' is not a log level",
            file=sys.stderr,
        )
        sys.exit(2)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        bucket_count = int(
            os.environ.get("CHAT_TRACKER_BUCKETS", str(DEFAULT_BUCKET_COUNT))
        )
    except ValueError:
        print("Error: CHAT_TRACKER_BUCKETS must be an integer", file=sys.stderr)
        sys.exit(2)

    try:
        with ChatTracker(bucket_count) as tracker:
            if args.file is not None:
                with open(args.file, encoding="utf-8") as script:
                    executed = replay(tracker, script, sys.stdout)
            else:
                executed = replay(tracker, sys.stdin, sys.stdout)
            logger.info(f"Replayed {executed} command(s)")
    except ChatTrackerError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)


if __name__ == "__main__":
    main()
