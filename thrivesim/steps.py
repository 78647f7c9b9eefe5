"""The individual steps an auto-evo run is made of."""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable

from thrivesim.run_results import RunResults
from thrivesim.simulation import SimulationConfiguration, Simulator

logger = logging.getLogger(__name__)

# Number of simulation steps used when scoring a mutation.
_MUTATION_SCORING_STEPS = 10


class RunStep(abc.ABC):
    """A unit of work in an auto-evo run, performed in one or more steps."""

    @abc.abstractmethod
    def step(self, results: RunResults) -> bool:
        """Perform a single step; return True once the final step is done."""

    @abc.abstractmethod
    def total_steps(self) -> int:
        """Return the number of steps left; may shrink as steps are taken."""


class LambdaStep(RunStep):
    """One-off step that calls a function with the results."""

    def __init__(self, operation: Callable[[RunResults], None]) -> None:
        self._operation = operation

    def step(self, results: RunResults) -> bool:
        self._operation(results)
        return True

    def total_steps(self) -> int:
        return 1


class FindBestMutation(RunStep):
    """Finds the mutation that gives a species the largest global population.

    Keeping the species unmutated is one of the candidates unless
    ``allow_no_mutation`` is False.
    """

    def __init__(
        self,
        patch_map: Any,
        species: Any,
        mutations_to_try: int,
        simulator: Simulator,
        allow_no_mutation: bool = True,
    ) -> None:
        self._map = patch_map
        self._species = species
        self._simulator = simulator
        self._try_no_mutation = allow_no_mutation
        self._mutations_to_try = mutations_to_try
        self._best_mutation: Any = None
        self._best_score = -1
        self._best_is_no_mutation = False

    def _simulate(self, config: SimulationConfiguration) -> RunResults:
        result = self._simulator.simulate_patch_map(self._map, config)
        if result is None:
            raise RuntimeError("patch map simulation produced no results")
        return result

    def step(self, results: RunResults) -> bool:
        ran = False

        if self._try_no_mutation:
            config = SimulationConfiguration(steps=_MUTATION_SCORING_STEPS)
            population = self._simulate(config).get_global_population(self._species)
            if population > self._best_score:
                self._best_score = population
                self._best_is_no_mutation = True
                self._best_mutation = None
            self._try_no_mutation = False
            ran = True

        if self._mutations_to_try > 0 and not ran:
            mutated = self._simulator.mutate_species(self._species)
            config = SimulationConfiguration(
                steps=_MUTATION_SCORING_STEPS,
                excluded_species=[self._species],
                extra_species=[mutated],
            )
            population = self._simulate(config).get_global_population(mutated)
            if population > self._best_score:
                self._best_score = population
                self._best_is_no_mutation = False
                self._best_mutation = mutated
            self._mutations_to_try -= 1

        if not self._try_no_mutation and self._mutations_to_try <= 0:
            best = None if self._best_is_no_mutation else self._best_mutation
            results.add_mutation_result_for_species(self._species, best)
            return True
        return False

    def total_steps(self) -> int:
        return (1 if self._try_no_mutation else 0) + self._mutations_to_try


class CalculatePopulation(RunStep):
    """Simulates the populations of every patch, one patch per step."""

    def __init__(self, patch_map: Any, simulator: Simulator) -> None:
        self._patches = [patch for _, patch in sorted(patch_map.patches.items())]
        self._simulator = simulator
        self._index = 0

    def step(self, results: RunResults) -> bool:
        if self._index >= len(self._patches):
            logger.error("Invalid patch index in CalculatePopulation: %d", self._index)
            return True

        patch = self._patches[self._index]
        self._simulator.simulate_patch(patch, results, SimulationConfiguration())
        self._index += 1
        return self._index >= len(self._patches)

    def total_steps(self) -> int:
        return len(self._patches)