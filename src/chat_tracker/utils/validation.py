"""
Validation Utilities

Contains utility functions for validating construction parameters and
replay commands.
"""

from typing import List, Optional, Tuple

MIN_BUCKET_COUNT = 1


def validate_bucket_count(bucket_count) -> Tuple[bool, Optional[str]]:
    """
    Validate a hash directory bucket count.

    Args:
        bucket_count: The requested number of buckets

    Returns:
        tuple: (is_valid, error_message)
            - is_valid: True if the bucket count is usable, False otherwise
            - error_message: Error message if invalid, None if valid
    """
    # bool is an int subclass but never a meaningful bucket count
    if isinstance(bucket_count, bool) or not isinstance(bucket_count, int):
        return False, f"Bucket count must be an integer, got {bucket_count!r}"

    if bucket_count < MIN_BUCKET_COUNT:
        return (
            False,
            f"Bucket count must be at least {MIN_BUCKET_COUNT}, got {bucket_count}",
        )

    return True, None


def validate_arity(
    verb: str, args: List[str], minimum: int, maximum: int
) -> Tuple[bool, Optional[str]]:
    """Check that a command received between minimum and maximum arguments."""
    if minimum <= len(args) <= maximum:
        return True, None

    if minimum == maximum:
        expected = f"{minimum}"
    else:
        expected = f"{minimum} to {maximum}"
    return (
        False,
        f"'{verb}' expects {expected} argument(s), got {len(args)}",
    )
