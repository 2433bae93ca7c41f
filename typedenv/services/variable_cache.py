"""Variable cache service.

Memoizes the string each environment variable resolved to, so repeated
typed reads do not go back to the environment.
"""

from __future__ import annotations

from typing import Protocol


class VariableCacheProtocol(Protocol):
    """Protocol for variable cache implementations."""

    def get(self, key: str) -> str | None:
        """Get the cached string for a key."""
        ...

    def contains(self, key: str) -> bool:
        """Check if a key has been resolved."""
        ...

    def set(self, key: str, value: str) -> None:
        """Cache a resolved string."""
        ...

    def mark_unset(self, key: str) -> None:
        """Record that a key was looked up and found absent."""
        ...

    def is_unset(self, key: str) -> bool:
        """Check if a key is recorded as absent."""
        ...

    def clear(self) -> None:
        """Forget every resolved key."""
        ...


class InMemoryVariableCache:
    """Dictionary-backed variable cache.

    A key is either absent (never resolved), mapped to its resolved string,
    or recorded as unset. Not thread-safe: load configuration during
    single-threaded startup, before concurrent readers begin.
    """

    def __init__(self) -> None:
        """Initialize empty cache."""
        self._values: dict[str, str] = {}
        self._unset: set[str] = set()

    def get(self, key: str) -> str | None:
        """Get the cached string for a key.

        Args:
            key: The variable name.

        Returns:
            The cached string, or None if the key has no cached string.
        """
        return self._values.get(key)

    def contains(self, key: str) -> bool:
        """Check if a key has been resolved.

        Args:
            key: The variable name.

        Returns:
            True if the key holds a string or is recorded as unset.
        """
        return key in self._values or key in self._unset

    def set(self, key: str, value: str) -> None:
        """Cache a resolved string, replacing any unset marker.

        Args:
            key: The variable name.
            value: The resolved string.
        """
        self._unset.discard(key)
        self._values[key] = value

    def mark_unset(self, key: str) -> None:
        """Record that a key was looked up and found absent.

        Args:
            key: The variable name.
        """
        self._values.pop(key, None)
        self._unset.add(key)

    def is_unset(self, key: str) -> bool:
        """Check if a key is recorded as absent.

        Args:
            key: The variable name.

        Returns:
            True if the key was marked unset.
        """
        return key in self._unset

    def clear(self) -> None:
        """Forget every resolved key."""
        self._values.clear()
        self._unset.clear()

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the cached strings.

        Returns:
            Mapping of variable name to cached string.
        """
        return dict(self._values)

    def __len__(self) -> int:
        """Return the number of resolved keys, unset markers included."""
        return len(self._values) + len(self._unset)
