"""A set of locked concepts addressed by name."""

from __future__ import annotations


class LockedMap:
    """Holds the names of locked concepts; anything not locked is available."""

    def __init__(self) -> None:
        self._locks: set[str] = set()

    def add_lock(self, lock_name: str) -> None:
        """Lock a concept."""
        self._locks.add(lock_name)

    def is_locked(self, concept_name: str) -> bool:
        """Return True if the concept is locked."""
        return concept_name in self._locks

    def unlock(self, concept_name: str) -> None:
        """Unlock a concept; unlocking an unknown name does nothing."""
        self._locks.discard(concept_name)

    def locks_list(self) -> frozenset[str]:
        """Return all held locks."""
        return frozenset(self._locks)