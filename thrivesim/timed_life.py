"""Entities that despawn once their lifetime runs out."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Mapping, TypeVar

K = TypeVar("K", bound=Hashable)


@dataclass
class TimedLifeComponent:
    """Time in seconds until the owning entity despawns."""

    time_to_live: float = 0.0


def run_timed_life(
    components: Mapping[K, TimedLifeComponent],
    elapsed: float,
    destroy: Callable[[K], None],
) -> list[K]:
    """Age every component by elapsed seconds and destroy expired entities.

    Returns the ids passed to ``destroy``.
    """
    expired: list[K] = []
    for entity, component in components.items():
        component.time_to_live -= elapsed
        if component.time_to_live <= 0:
            destroy(entity)
            expired.append(entity)
    return expired