"""A single auto-evo run and its queued external population effects."""

from __future__ import annotations

import enum
import logging
import threading
from collections import deque
from typing import Any

from thrivesim.run_results import PopulationNotFoundError, RunResults
from thrivesim.simulation import Simulator
from thrivesim.steps import CalculatePopulation, FindBestMutation, LambdaStep, RunStep

logger = logging.getLogger(__name__)


class RunStage(enum.Enum):
    """Stages a run goes through."""

    # Data is loaded and the total number of steps is calculated.
    GATHERING_INFO = enum.auto()
    # Steps are being executed.
    STEPPING = enum.auto()
    # All steps are done and the results are written.
    ENDED = enum.auto()


class RunParameters:
    """One auto-evo run over a patch map.

    The patch map is expected to have ``patches`` (a mapping of patch id to
    patch), ``current_patch_id`` and ``get_patch(patch_id)``.  Each patch
    has ``species``, a list of entries with ``species`` and ``population``;
    species have an ``is_player_species`` flag.
    """

    def __init__(self, patch_map: Any, simulator: Simulator) -> None:
        if patch_map is None:
            raise ValueError("null map given to RunParameters")
        self._map = patch_map
        self._simulator = simulator
        self._results = RunResults()

        self._state = RunStage.GATHERING_INFO
        self._in_progress = False
        self._success = False
        self._total_steps = -1
        self._complete_steps = 0

        self._step_lock = threading.Lock()
        self._effects_lock = threading.Lock()
        self._external_effects: list[tuple[Any, int, str]] = []
        self._run_steps: deque[RunStep] = deque()

        self.mutations_per_species = 3
        self.allow_no_mutation = True

    @property
    def in_progress(self) -> bool:
        """True while the run is executing."""
        return self._in_progress

    @property
    def was_successful(self) -> bool:
        """True once the run finished without being aborted."""
        return self._success

    @property
    def results(self) -> RunResults:
        """The results; only meaningful once the run was successful."""
        return self._results

    @property
    def state(self) -> RunStage:
        """The current stage of the run."""
        return self._state

    @property
    def total_steps(self) -> int:
        """Total step count, -1 until it is computed."""
        return self._total_steps

    @property
    def complete_steps(self) -> int:
        """Number of steps done so far."""
        return self._complete_steps

    def abort(self) -> None:
        """Stop the run; returns once no step is using outside data."""
        self._in_progress = False
        with self._step_lock:
            self._in_progress = False
            self._success = False

    def completion_fraction(self) -> float:
        """Return the fraction of steps done, 0 before it is known."""
        if self._total_steps < 0:
            return 0.0
        return self._complete_steps / self._total_steps

    def status_string(self) -> str:
        """Return a description such as "21.000000% done. 21/100 steps."."""
        if not self._in_progress:
            return "Finished." if self._success else "Not running."
        if self._total_steps > 0:
            return (
                f"{self.completion_fraction() * 100:f}% done. "
                f"{self._complete_steps}/{self._total_steps} steps."
            )
        return "Starting"

    def add_external_population_effect(
        self, species: Any, amount: int, event_type: str
    ) -> None:
        """Queue a population change (player death, reproduction, ...)."""
        with self._effects_lock:
            self._external_effects.append((species, amount, event_type))

    def apply_external_effects(self) -> None:
        """Apply the queued effects in the current patch; call after the run."""
        with self._effects_lock:
            if not self._external_effects:
                return
            current_patch = self._map.current_patch_id
            for species, amount, _ in self._external_effects:
                try:
                    current = self._results.get_population_in_patch(
                        species, current_patch
                    )
                except PopulationNotFoundError as error:
                    logger.warning("External effect can't be applied: %s", error)
                    continue
                self._results.add_population_result_for_species(
                    species, current_patch, current + amount
                )
            self._results.apply_results(self._map, False, self._simulator)

    def make_summary_of_external_effects(self) -> str:
        """Return one line per queued external effect."""
        return "".join(
            f"{species.formatted_name()} population changed by {amount} "
            f"because of: {event_type}\n"
            for species, amount, event_type in self._external_effects
        )

    def step(self) -> bool:
        """Perform one calculation step; return True when finished or aborted."""
        with self._step_lock:
            if not self._in_progress:
                return True

            if self._state is RunStage.GATHERING_INFO:
                logger.info("Auto-evo run is gathering info")
                self._gather_info()
                # +2 for this step and the result applying step
                self._total_steps = (
                    sum(step.total_steps() for step in self._run_steps) + 2
                )
                logger.info("Step count for simulation: %d", self._total_steps)
                self._complete_steps += 1
                self._state = RunStage.STEPPING
                return False

            if self._state is RunStage.STEPPING:
                if not self._run_steps:
                    self._state = RunStage.ENDED
                else:
                    if self._run_steps[0].step(self._results):
                        self._run_steps.popleft()
                    self._complete_steps += 1
                return False

            logger.info("Auto-evo run is complete. Applying results")
            # Extinct species are not removed here as external effects may
            # still revive them.
            self._results.print_summary(self._map)
            self._results.stored_summary = self._results.make_summary(self._map, True)
            self._results.apply_results(self._map, True, self._simulator)
            self._success = True
            self._in_progress = False
            self._complete_steps += 1
            return True

    def _gather_info(self) -> None:
        patches = sorted(self._map.patches.items())
        logger.info("Patch count: %d", len(patches))

        total_species = 0
        for _, patch in patches:
            for entry in patch.species:
                total_species += 1
                # The player species doesn't get random mutations
                if not entry.species.is_player_species:
                    self._run_steps.append(
                        FindBestMutation(
                            self._map,
                            entry.species,
                            self.mutations_per_species,
                            self._simulator,
                            self.allow_no_mutation,
                        )
                    )

        # Populations don't depend on the mutations so the player competes
        # against the same species they saw.
        self._run_steps.append(CalculatePopulation(self._map, self._simulator))

        patch_map = self._map

        def keep_player_populations(results: RunResults) -> None:
            for patch_id, patch in sorted(patch_map.patches.items()):
                for entry in patch.species:
                    if entry.species.is_player_species:
                        results.add_population_result_for_species(
                            entry.species, patch_id, entry.population
                        )

        self._run_steps.append(LambdaStep(keep_player_populations))
        logger.info("Species count: %d", total_species)

    def begin_executing(self) -> None:
        """Mark the run as started."""
        self._in_progress = True