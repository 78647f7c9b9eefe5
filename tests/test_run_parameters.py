from dataclasses import dataclass, field

import pytest

from thrivesim.run_parameters import RunParameters, RunStage
from thrivesim.run_results import RunResults
from thrivesim.simulation import Simulator


@dataclass(eq=False)
class FakeSpecies:
    name: str
    is_player_species: bool = False
    string_code: str = "AAA"

    def formatted_name(self, detailed=True):
        return self.name


@dataclass
class Entry:
    species: FakeSpecies
    population: int


@dataclass
class FakePatch:
    name: str
    species: list = field(default_factory=list)

    def update_species_population(self, species, population):
        for entry in self.species:
            if entry.species is species:
                entry.population = population
                return True
        return False

    def species_population(self, species):
        for entry in self.species:
            if entry.species is species:
                return entry.population
        return 0


@dataclass
class FakeMap:
    patches: dict
    current_patch_id: int = 0

    def get_patch(self, patch_id):
        return self.patches.get(patch_id)


PLAYER = FakeSpecies("Player", is_player_species=True)
OTHER = FakeSpecies("Other")


def make_map():
    return FakeMap(
        {
            0: FakePatch("Pond", [Entry(PLAYER, 100), Entry(OTHER, 20)]),
            1: FakePatch("Vent", [Entry(OTHER, 30)]),
        }
    )


def make_simulator(applied):
    def mutate(species):
        return FakeSpecies(species.name + "-mutant")

    def simulate_map(patch_map, config):
        results = RunResults()
        for patch_id, patch in patch_map.patches.items():
            for entry in patch.species:
                if entry.species not in config.excluded_species:
                    results.add_population_result_for_species(entry.species, patch_id, entry.population)
        for species in config.extra_species:
            results.add_population_result_for_species(species, 0, 1)
        return results

    def simulate_patch(patch, results, config):
        patch_id = 0 if patch.name == "Pond" else 1
        for entry in patch.species:
            results.add_population_result_for_species(entry.species, patch_id, 42)

    return Simulator(
        create_mutated_species=mutate,
        apply_mutated_species_properties=lambda s, m: applied.append((s, m)),
        simulate_patch_map_populations=simulate_map,
        simulate_patch_populations=simulate_patch,
    )


def run_to_end(run):
    run.begin_executing()
    while not run.step():
        pass


def test_null_map_is_rejected():
    with pytest.raises(ValueError):
        RunParameters(None, Simulator())


def test_initial_status():
    run = RunParameters(make_map(), Simulator())
    assert run.status_string() == "Not running."
    assert run.completion_fraction() == 0.0
    assert run.state is RunStage.GATHERING_INFO


def test_step_without_starting_does_nothing():
    run = RunParameters(make_map(), Simulator())
    assert run.step() is True
    assert run.total_steps == -1


def test_full_run_completes_every_step():
    patch_map = make_map()
    applied = []
    run = RunParameters(patch_map, make_simulator(applied))
    run_to_end(run)
    assert run.was_successful
    assert not run.in_progress
    assert run.status_string() == "Finished."
    assert run.complete_steps == run.total_steps
    assert run.completion_fraction() == 1.0
    assert applied == []
    assert run.results.stored_summary == run.results.make_summary(patch_map, True) or run.results.stored_summary


def test_full_run_updates_populations_but_keeps_player():
    patch_map = make_map()
    run = RunParameters(patch_map, make_simulator([]))
    run_to_end(run)
    pond, vent = patch_map.patches[0], patch_map.patches[1]
    assert pond.species_population(PLAYER) == 100
    assert pond.species_population(OTHER) == 42
    assert vent.species_population(OTHER) == 42


def test_status_after_gathering_reports_progress():
    run = RunParameters(make_map(), make_simulator([]))
    run.begin_executing()
    assert run.status_string() == "Starting"
    assert run.step() is False
    status = run.status_string()
    assert "% done. " in status
    assert status.endswith(f"1/{run.total_steps} steps.")
    assert run.state is RunStage.STEPPING


def test_abort_stops_run():
    run = RunParameters(make_map(), make_simulator([]))
    run.begin_executing()
    run.step()
    run.abort()
    assert run.step() is True
    assert not run.was_successful
    assert run.status_string() == "Not running."


def test_external_effect_for_unknown_species_is_skipped():
    patch_map = make_map()
    run = RunParameters(patch_map, make_simulator([]))
    run_to_end(run)
    stranger = FakeSpecies("Stranger")
    run.add_external_population_effect(stranger, 5, "cheat")
    run.apply_external_effects()
    assert run.results.get_population_in_patch(PLAYER, 0) == 100
    assert all(entry.species is not stranger for entry in run.results.results)


def test_no_external_effects_gives_empty_summary():
    run = RunParameters(make_map(), Simulator())
    run.apply_external_effects()
    assert run.make_summary_of_external_effects() == ""