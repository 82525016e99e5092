"""
Disk-backed storage slot built on diskcache.

A StorageSlot is a single named key inside a diskcache directory. It plays
the role a browser's local storage entry plays for a client-side editor:
one string value, overwritten on every save.
"""

from pathlib import Path

import diskcache


class StorageSlot:
    """
    One named value stored in a diskcache directory.

    Thread-safe and process-safe through diskcache.

    Attributes:
        cache_dir: Path to the cache directory.
        key: Name of the slot within the cache.
    """

    def __init__(self, cache_dir: str | Path, key: str) -> None:
        """
        Open (or create) the cache directory holding the slot.

        Args:
            cache_dir: Directory path for the cache files.
            key: Slot name.
        """
        self.cache_dir = Path(cache_dir)
        self.key = key
        self._cache = diskcache.Cache(str(self.cache_dir))

    def read(self) -> str | None:
        """Return the stored value, or None when the slot is empty."""
        value = self._cache.get(self.key, default=None)
        if value is None:
            return None
        return str(value)

    def write(self, value: str) -> None:
        """
        Overwrite the slot.

        Raises:
            diskcache/sqlite errors when the write fails.
        """
        self._cache.set(self.key, value)

    def clear(self) -> None:
        """Remove the stored value if present."""
        self._cache.delete(self.key)

    def close(self) -> None:
        """Close the cache and release resources."""
        self._cache.close()
