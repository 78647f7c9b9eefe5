"""Effects that run as time jumps forward in a world."""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class WorldEffect(abc.ABC):
    """An effect applied to a world when time passes."""

    def __init__(self) -> None:
        self.world: Any = None

    def on_register_to_world(self, world: Any) -> None:
        """Called when the effect is added to a world."""
        self.world = world

    @abc.abstractmethod
    def on_time_passed(self, elapsed: float, total_time_passed: float) -> None:
        """Apply the effect for a jump of elapsed time."""


class WorldEffectLambda(WorldEffect):
    """World effect that calls a function."""

    def __init__(self, on_passed: Callable[[float, float], None]) -> None:
        super().__init__()
        self._on_passed = on_passed

    def on_time_passed(self, elapsed: float, total_time_passed: float) -> None:
        self._on_passed(elapsed, total_time_passed)


class TimedWorldOperations:
    """Runs registered effects as time passes in a world.

    This is not realtime gameplay time but the time jumps such as those
    taken in the editor.
    """

    def __init__(self, world: Any) -> None:
        self.world = world
        self._total_passed_time = 0.0
        self._effects: dict[str, WorldEffect] = {}

    @property
    def total_passed_time(self) -> float:
        """Time passed since creation or the last clear()."""
        return self._total_passed_time

    def on_time_passed(self, time_passed: float) -> None:
        """Advance time and run every effect, in name order."""
        if not self._effects:
            return
        self._total_passed_time += time_passed
        logger.info(
            "TimedWorldOperations: running effects. elapsed: %s total passed: %s",
            time_passed,
            self._total_passed_time,
        )
        for name in sorted(self._effects):
            self._effects[name].on_time_passed(time_passed, self._total_passed_time)

    def register_effect(self, name: str, effect: Optional[WorldEffect]) -> None:
        """Register an effect under a name, replacing any previous one.

        Registering None removes the effect of that name.
        """
        if effect is None:
            self._effects.pop(name, None)
            return
        effect.on_register_to_world(self.world)
        self._effects[name] = effect

    def clear(self) -> None:
        """Reset the passed time; effects are kept."""
        self._total_passed_time = 0.0