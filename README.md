# thrivesim

Building blocks for a microbe evolution game simulation, in plain Python with
no third-party dependencies.

## Modules

- `thrivesim.hex`: flat-topped hex grid helpers in axial and cube coordinates:
  `axial_to_cartesian`, `cartesian_to_axial`, `axial_to_cube`, `cube_to_axial`,
  `cube_hex_round`, `encode_axial`, `decode_axial`, `rotate_axial`,
  `rotate_axial_n_times`, `flip_horizontally` and `get_hex_size`. The results
  are named tuples (`Axial`, `Cube`, `Point3`). `encode_axial` raises
  `ValueError` for coordinates whose magnitude is 256 or more.
- `thrivesim.mathutil`: `sigmoid`.
- `thrivesim.locked_map`: `LockedMap`, a set of locked concept names.
- `thrivesim.player_data`: `PlayerData`, which holds the player's name,
  active creature, locked concepts, boolean flags and freebuild state.
  `new_game()` resets everything except the name.
- `thrivesim.registry`: `JsonRegistry` and `RegistryType`. A registry is
  filled from a JSON object (`load_mapping`) or a JSON file
  (`JsonRegistry.from_file`). Entries get ids in sorted name order. Lookups by
  id or internal name raise `TypeNotFoundError` when nothing matches.
- `thrivesim.backgrounds`, `thrivesim.bioprocesses`, `thrivesim.biomes`:
  `Background`, `BioProcess` and `Biome` (with `BiomeCompoundData`,
  `ChunkData`, `ChunkCompoundData`, `ChunkMeshData`). They are built from
  JSON through their `from_json` class methods. Compound names are resolved
  through a compound registry.
- `thrivesim.keys`: `KeyConfiguration`, `KeyBinding`, `MainMenuKeyListener`
  and `GlobalUtilityKeyHandler`. `GlobalUtilityKeyHandler` calls the
  screenshot and debug-toggle callbacks you pass in.
- `thrivesim.timed_life`: `TimedLifeComponent` and `run_timed_life`.
  `run_timed_life` ages components and destroys the expired entities.
- `thrivesim.timed_world`: `WorldEffect`, `WorldEffectLambda` and
  `TimedWorldOperations`. These run effects as world time jumps forward.
- The auto-evolution runner:
  - `thrivesim.simulation`: `Simulator` and `SimulationConfiguration`.
  - `thrivesim.run_results`: `RunResults` and `SpeciesResult`.
  - `thrivesim.steps`: `RunStep`, `LambdaStep`, `FindBestMutation` and
    `CalculatePopulation`.
  - `thrivesim.run_parameters`: `RunParameters` and `RunStage`.
  - `thrivesim.auto_evo`: `AutoEvo`, which works through queued runs one
    after another on a background thread.

## Installing

```
pip install .
```

## Examples

Hex coordinates:

```python
from thrivesim.hex import axial_to_cartesian, encode_axial, decode_axial

x, y, z = axial_to_cartesian(1, 2)
key = encode_axial(3, -4)
assert decode_axial(key) == (3, -4)
```

A registry of backgrounds:

```python
from thrivesim.backgrounds import Background
from thrivesim.registry import JsonRegistry

backgrounds = JsonRegistry(Background.from_json)
backgrounds.load_mapping({"ocean": {"name": "Ocean", "textures": ["a", "b"]}})
assert backgrounds.get_type_data("ocean").layers == ["a", "b"]
```

Auto-evo runs:

```python
from thrivesim.auto_evo import AutoEvo
from thrivesim.run_parameters import RunParameters
from thrivesim.simulation import Simulator

simulator = Simulator(
    create_mutated_species=...,
    apply_mutated_species_properties=...,
    simulate_patch_map_populations=...,
    simulate_patch_populations=...,
)

with AutoEvo() as auto_evo:
    auto_evo.begin_run(RunParameters(patch_map, simulator))
    print(auto_evo.status_string())
```

`patch_map` is your game's patch map object. It needs the following:

- `patches`: a mapping of patch id to patch.
- `current_patch_id`.
- `get_patch(patch_id)`.

Each patch has a `species` list of entries that carry `species` and
`population`.

If a `Simulator` function is missing or raises, that run counts as failed. The
failure is logged and the method returns `None`.

## What this package does not do

This is a library, not a game. It has:

- no command-line program;
- no rendering or input devices;
- no networking or saving.

It also does not do the population simulation or the mutation of species by
itself. Those come from the functions you give to `Simulator`.

## Running the tests

```
pip install .[test]
pytest
```