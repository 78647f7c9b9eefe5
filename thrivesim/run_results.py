"""Auto-evo results held until they are applied to the world."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Protocol

if TYPE_CHECKING:
    from thrivesim.simulation import Simulator

logger = logging.getLogger(__name__)


class PopulationNotFoundError(LookupError):
    """Raised when no population is stored for a species (or patch)."""


class SpeciesLike(Protocol):
    name: str
    string_code: str

    def formatted_name(self, detailed: bool = True) -> str: ...


class PatchLike(Protocol):
    name: str

    def update_species_population(self, species: Any, population: int) -> bool: ...

    def species_population(self, species: Any) -> int: ...


class PatchMapLike(Protocol):
    def get_patch(self, patch_id: int) -> Optional[PatchLike]: ...


@dataclass
class SpeciesResult:
    """Results for one species; a mutation of None means no change."""

    species: Any
    new_population_in_patches: dict[int, int] = field(default_factory=dict)
    mutated_properties: Any = None
    # (patch id, population) pairs of patches the species spread to.
    spread_patches: list[tuple[int, int]] = field(default_factory=list)


def _patch_name(patches: Optional[PatchMapLike], patch_id: int) -> str:
    if patches is None:
        return str(patch_id)
    patch = patches.get_patch(patch_id)
    if patch is None:
        return f"{patch_id} (invalid)"
    return patch.name


class RunResults:
    """Container for results before they are applied.

    Earlier parts of a run must not affect the later parts, so nothing is
    written to species or patches until apply_results() is called.
    """

    def __init__(self) -> None:
        self.results: list[SpeciesResult] = []
        self.stored_summary = ""

    def _find(self, species: Any) -> Optional[SpeciesResult]:
        return next((entry for entry in self.results if entry.species is species), None)

    def _entry(self, species: Any) -> SpeciesResult:
        entry = self._find(species)
        if entry is None:
            entry = SpeciesResult(species)
            self.results.append(entry)
        return entry

    def add_mutation_result_for_species(self, species: Any, mutated: Any) -> None:
        """Record the mutation chosen for species (None for none)."""
        self._entry(species).mutated_properties = mutated

    def add_population_result_for_species(
        self, species: Any, patch: int, new_population: int
    ) -> None:
        """Record the new population of species in a patch."""
        self._entry(species).new_population_in_patches[patch] = new_population

    def apply_results(
        self,
        patch_map: PatchMapLike,
        skip_mutations: bool,
        simulator: Optional["Simulator"] = None,
    ) -> None:
        """Write mutations and populations to the species and patches."""
        for entry in self.results:
            if not skip_mutations and entry.mutated_properties is not None:
                if simulator is None:
                    raise ValueError("a simulator is needed to apply mutations")
                logger.info("Applying mutation to species: %s", entry.species.name)
                simulator.apply_mutation(entry.species, entry.mutated_properties)

            for patch_id, population in sorted(entry.new_population_in_patches.items()):
                patch = patch_map.get_patch(patch_id)
                if patch is None:
                    logger.error(
                        "RunResults has a species population change in a patch "
                        "with invalid id: %s",
                        patch_id,
                    )
                elif not patch.update_species_population(entry.species, population):
                    logger.error(
                        "RunResults failed to update population for a species "
                        "in a patch"
                    )

            if entry.spread_patches:
                logger.error("spreadPatches applying is not done")

    def get_global_population(self, species: Any) -> int:
        """Sum the populations of species over all patches, ignoring negatives."""
        entry = self._find(species)
        if entry is None:
            raise PopulationNotFoundError("no population found for requested species")
        return sum(max(population, 0) for population in entry.new_population_in_patches.values())

    def get_population_in_patch(self, species: Any, patch: int) -> int:
        """Return the population of species in a single patch."""
        entry = self._find(species)
        if entry is None or patch not in entry.new_population_in_patches:
            raise PopulationNotFoundError("no population found for requested species")
        return entry.new_population_in_patches[patch]

    def print_summary(self, previous_populations: Optional[PatchMapLike] = None) -> None:
        """Log a summary of the results."""
        logger.info(
            "Start of auto-evo results summary (entries: %d)", len(self.results)
        )
        logger.info("%s", self.make_summary(previous_populations, False))
        logger.info("End of results summary")

    def make_summary(
        self,
        previous_populations: Optional[PatchMapLike] = None,
        player_readable: bool = False,
    ) -> str:
        """Return summary text; player readable text leaves out ids and codes."""
        lines: list[str] = []
        for entry in self.results:
            lines.append(f"{entry.species.formatted_name(not player_readable)}:\n")

            if entry.mutated_properties is not None:
                text = " has a mutation"
                if not player_readable:
                    text += f", gene code: {entry.mutated_properties.string_code}"
                lines.append(text + "\n")

            if entry.spread_patches:
                lines.append(" spread to patches:\n")
                for patch, population in entry.spread_patches:
                    if player_readable:
                        name = _patch_name(previous_populations, patch)
                        lines.append(f"  {name} population: {population}\n")
                    else:
                        lines.append(f"  {patch} pop: {population}\n")

            lines.append(" population in patches:\n")
            for patch, population in sorted(entry.new_population_in_patches.items()):
                text = "  "
                if not player_readable:
                    text += str(patch)
                text += f" {_patch_name(previous_populations, patch)}"
                text += f" population: {population}"
                patch_obj = (
                    previous_populations.get_patch(patch)
                    if previous_populations is not None
                    else None
                )
                if patch_obj is not None:
                    text += f" previous: {patch_obj.species_population(entry.species)}"
                lines.append(text + "\n")

            if player_readable:
                lines.append("\n")
        return "".join(lines)