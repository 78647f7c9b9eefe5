"""Per-player state that lives for the length of one game."""

from __future__ import annotations

import logging

from thrivesim.locked_map import LockedMap

logger = logging.getLogger(__name__)

# Entity id meaning "no entity".
NULL_OBJECT = 0

# Compound id meaning "no compound" (all bits of a 16 bit id set).
NULL_COMPOUND = 0xFFFF


class PlayerData:
    """Name, active creature, locked concepts and flags of a player."""

    def __init__(self, name: str) -> None:
        self._player_name = name
        self._reset()

    def _reset(self) -> None:
        self._active_creature = NULL_OBJECT
        self._locked_map = LockedMap()
        self._free_building = False
        self._bool_set: set[str] = set()

    @property
    def player_name(self) -> str:
        """The name of the player."""
        return self._player_name

    @property
    def locked_map(self) -> LockedMap:
        """The map of locked concepts."""
        return self._locked_map

    @property
    def active_creature(self) -> int:
        """Entity id of the creature the player currently controls."""
        return self._active_creature

    def set_active_creature(self, creature_id: int) -> None:
        """Make another entity the player's creature.

        The previous creature should be dead or handed to the AI.
        """
        logger.info("Active player creature is now: %s", creature_id)
        self._active_creature = creature_id

    def is_bool_set(self, key: str) -> bool:
        """Return True if a true flag is bound to key."""
        return key in self._bool_set

    def set_bool(self, key: str, value: bool) -> None:
        """Bind key to a boolean flag."""
        if value:
            self._bool_set.add(key)
        else:
            self._bool_set.discard(key)

    @property
    def is_free_building(self) -> bool:
        """True once the player has entered freebuild mode."""
        return self._free_building

    def enter_free_build(self) -> None:
        """Enable freebuild; only new_game() turns it off again."""
        logger.info("Marking player as having used freebuild")
        self._free_building = True

    def new_game(self) -> None:
        """Reset everything except the player's name."""
        logger.info("Clearing PlayerData for new game")
        self._reset()