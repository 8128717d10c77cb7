"""
Utilities for the Chat Tracker

This module contains small validation helpers shared by the tracker and
the command replay CLI.
"""

from .validation import MIN_BUCKET_COUNT, validate_arity, validate_bucket_count

__all__ = [
    "MIN_BUCKET_COUNT",
    "validate_arity",
    "validate_bucket_count",
]
