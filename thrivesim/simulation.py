"""Hooks that run the population simulation and species mutation logic."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

if TYPE_CHECKING:
    from thrivesim.run_results import RunResults

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfiguration:
    """Settings for a single simulation run."""

    steps: int = 1
    # Species listed here are left out of the run.
    excluded_species: list[Any] = field(default_factory=list)
    # Extra species to include; their per-patch population is taken from
    # the species' global population.
    extra_species: list[Any] = field(default_factory=list)

    @property
    def excluded_species_count(self) -> int:
        """Number of excluded species."""
        return len(self.excluded_species)

    @property
    def extra_species_count(self) -> int:
        """Number of extra species."""
        return len(self.extra_species)

    def get_excluded_species(self, index: int) -> Any:
        """Return the excluded species at index."""
        if not 0 <= index < len(self.excluded_species):
            raise IndexError("index out of range")
        return self.excluded_species[index]

    def get_extra_species(self, index: int) -> Any:
        """Return the extra species at index."""
        if not 0 <= index < len(self.extra_species):
            raise IndexError("index out of range")
        return self.extra_species[index]


@dataclass
class Simulator:
    """Runs the pluggable simulation functions and reports their failures.

    A function that is missing or raises counts as a failed run: the
    failure is logged and the method returns None.
    """

    create_mutated_species: Optional[Callable[[Any], Any]] = None
    apply_mutated_species_properties: Optional[Callable[[Any, Any], None]] = None
    simulate_patch_map_populations: Optional[
        Callable[[Any, SimulationConfiguration], "RunResults | None"]
    ] = None
    simulate_patch_populations: Optional[
        Callable[[Any, "RunResults", SimulationConfiguration], None]
    ] = None

    def _run(self, name: str, function: Optional[Callable[..., Any]], *args: Any) -> tuple[bool, Any]:
        if function is None:
            logger.error("Failed to run %s: no function set", name)
            return False, None
        try:
            return True, function(*args)
        except Exception:
            logger.error("Failed to run %s", name, exc_info=True)
            return False, None

    def mutate_species(self, species: Any) -> Any:
        """Return a mutated version of species, or None on failure."""
        ok, mutated = self._run(
            "createMutatedSpecies", self.create_mutated_species, species
        )
        if not ok:
            return None
        if mutated is None:
            logger.error("createMutatedSpecies returned null")
        return mutated

    def apply_mutation(self, species: Any, mutation: Any) -> None:
        """Copy the gene code and other properties of mutation onto species."""
        if species is None or mutation is None:
            return
        self._run(
            "applyMutatedSpeciesProperties",
            self.apply_mutated_species_properties,
            species,
            mutation,
        )

    def simulate_patch_map(
        self, patch_map: Any, config: SimulationConfiguration
    ) -> "RunResults | None":
        """Simulate a whole patch map at once; None on failure."""
        _, result = self._run(
            "simulatePatchMapPopulations",
            self.simulate_patch_map_populations,
            patch_map,
            config,
        )
        if result is None:
            logger.error("simulatePatchMapPopulations returned null")
        return result

    def simulate_patch(
        self, patch: Any, results: "RunResults", config: SimulationConfiguration
    ) -> None:
        """Simulate a single patch, storing final populations in results."""
        self._run(
            "simulatePatchPopulations",
            self.simulate_patch_populations,
            patch,
            results,
            config,
        )