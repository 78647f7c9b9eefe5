from dataclasses import dataclass, field

import pytest

from thrivesim.run_results import RunResults
from thrivesim.simulation import Simulator
from thrivesim.steps import CalculatePopulation, FindBestMutation, LambdaStep


@dataclass(eq=False)
class FakeSpecies:
    name: str
    score: int = 0


@dataclass
class FakeMap:
    patches: dict = field(default_factory=dict)


def scoring_simulator(base_score, mutant_scores):
    created = []

    def mutate(species):
        mutant = FakeSpecies(f"m{len(created)}", mutant_scores[len(created)])
        created.append(mutant)
        return mutant

    def simulate_map(patch_map, config):
        results = RunResults()
        if config.extra_species:
            for species in config.extra_species:
                results.add_population_result_for_species(species, 0, species.score)
        else:
            results.add_population_result_for_species(SPECIES, 0, base_score)
        return results

    return Simulator(create_mutated_species=mutate, simulate_patch_map_populations=simulate_map), created


SPECIES = FakeSpecies("base")


def test_lambda_step_calls_operation_once():
    seen = []
    step = LambdaStep(seen.append)
    results = RunResults()
    assert step.step(results) is True
    assert seen == [results]
    assert step.total_steps() == 1


def test_find_best_mutation_counts_down_steps():
    simulator, _ = scoring_simulator(10, [1, 2, 3])
    step = FindBestMutation(FakeMap(), SPECIES, 3, simulator)
    assert step.total_steps() == 4
    step.step(RunResults())
    assert step.total_steps() == 3


def test_find_best_mutation_picks_highest_population():
    simulator, created = scoring_simulator(10, [5, 50, 7])
    step = FindBestMutation(FakeMap(), SPECIES, 3, simulator)
    results = RunResults()
    outcomes = [step.step(results) for _ in range(4)]
    assert outcomes == [False, False, False, True]
    assert len(results.results) == 1
    assert results.results[0].species is SPECIES
    assert results.results[0].mutated_properties is created[1]
    assert step.total_steps() == 0


def test_find_best_mutation_keeps_unmutated_when_best():
    simulator, created = scoring_simulator(100, [5, 6])
    step = FindBestMutation(FakeMap(), SPECIES, 2, simulator)
    results = RunResults()
    while not step.step(results):
        pass
    assert len(created) == 2
    assert results.results[0].mutated_properties is None


def test_find_best_mutation_without_candidates_finishes_immediately():
    simulator, created = scoring_simulator(10, [])
    step = FindBestMutation(FakeMap(), SPECIES, 0, simulator, allow_no_mutation=False)
    results = RunResults()
    assert step.step(results) is True
    assert created == []
    assert results.results[0].mutated_properties is None


def test_find_best_mutation_raises_when_simulation_fails():
    step = FindBestMutation(FakeMap(), SPECIES, 1, Simulator())
    with pytest.raises(RuntimeError):
        step.step(RunResults())


def test_calculate_population_visits_patches_in_id_order():
    visited = []

    def simulate_patch(patch, results, config):
        visited.append(patch)

    simulator = Simulator(simulate_patch_populations=simulate_patch)
    step = CalculatePopulation(FakeMap({2: "b", 0: "a", 5: "c"}), simulator)
    assert step.total_steps() == 3
    results = RunResults()
    assert [step.step(results) for _ in range(3)] == [False, False, True]
    assert visited == ["a", "b", "c"]


def test_calculate_population_with_no_patches_finishes():
    step = CalculatePopulation(FakeMap(), Simulator())
    assert step.total_steps() == 0
    assert step.step(RunResults()) is True