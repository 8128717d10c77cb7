"""
Hash Directory

A fixed-size, separately chained hash index mapping names to the entities
the tracker owns. The bucket count is chosen at construction and never
changes; lookups scan the chain of a single bucket comparing names.
"""

import logging
import zlib
from typing import Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from .errors import DuplicateEntryError, InvalidBucketCountError
from .utils.validation import validate_bucket_count

logger = logging.getLogger(__name__)

T = TypeVar("T")


def bucket_for(name: str, bucket_count: int) -> int:
    """
    Map a name onto a bucket index.

    CRC-32 is used instead of the built-in hash() so the placement is the
    same in every process regardless of hash randomization.

    Args:
        name: The name to place
        bucket_count: Number of buckets in the directory

    Returns:
        The bucket index in [0, bucket_count)
    """
    return zlib.crc32(name.encode("utf-8")) % bucket_count


class HashDirectory(Generic[T]):
    """
    Owns a set of named entities, indexed by name.

    Each bucket is a list of (name, entity) pairs. Names are unique across
    the whole directory.
    """

    def __init__(self, bucket_count: int, label: str = "entries"):
        """
        Initialize an empty directory.

        Args:
            bucket_count: Fixed number of buckets, at least 1
            label: Human readable name used in log messages

        Raises:
            InvalidBucketCountError: If bucket_count is not a positive integer
        """
        is_valid, error = validate_bucket_count(bucket_count)
        if not is_valid:
            raise InvalidBucketCountError(error)

        self.label = label
        self._buckets: List[List[Tuple[str, T]]] = [
            [] for _ in range(bucket_count)
        ]
        self._size = 0

    @property
    def bucket_count(self) -> int:
        return len(self._buckets)

    @property
    def load_factor(self) -> float:
        """Average number of entries per bucket."""
        return self._size / len(self._buckets)

    def _bucket(self, name: str) -> List[Tuple[str, T]]:
        return self._buckets[bucket_for(name, len(self._buckets))]

    def insert(self, name: str, entity: T) -> None:
        """
        Add a new entity under its name.

        Args:
            name: The entity's unique name
            entity: The entity to store

        Raises:
            DuplicateEntryError: If the name is already present
        """
        bucket = self._bucket(name)
        for existing, _ in bucket:
            if existing == name:
                raise DuplicateEntryError(name)
        bucket.append((name, entity))
        self._size += 1
        logger.debug(f"Inserted '{name}' into {self.label} directory")

    def find(self, name: str) -> Optional[T]:
        """
        Look up an entity by name.

        Returns:
            The entity if found, None otherwise
        """
        for existing, entity in self._bucket(name):
            if existing == name:
                return entity
        return None

    def remove(self, name: str) -> Optional[T]:
        """
        Drop an entry and hand its entity back to the caller.

        Returns:
            The removed entity, or None if the name was not present
        """
        bucket = self._bucket(name)
        for index, (existing, entity) in enumerate(bucket):
            if existing == name:
                del bucket[index]
                self._size -= 1
                logger.debug(f"Removed '{name}' from {self.label} directory")
                return entity
        return None

    def clear(self) -> List[T]:
        """
        Empty the directory.

        Returns:
            Every entity that was stored, in bucket order
        """
        released = list(self)
        for bucket in self._buckets:
            bucket.clear()
        self._size = 0
        return released

    def bucket_sizes(self) -> Dict[int, int]:
        """Get the chain length of every non-empty bucket."""
        return {
            index: len(bucket)
            for index, bucket in enumerate(self._buckets)
            if bucket
        }

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        for bucket in self._buckets:
            for _, entity in bucket:
                yield entity
