"""Biomes: the environmental conditions of a patch, with compounds and chunks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from thrivesim.registry import JsonRegistry, RegistryType, json_as_string

logger = logging.getLogger(__name__)


def _as_object(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if isinstance(value, Mapping):
        return value
    raise ValueError(f"{what} is not a JSON object")


def _as_float(value: Any) -> float:
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    raise ValueError(f"value can't be converted to a number: {value!r}")


def _as_uint(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, (bool, int, float)):
        if value < 0:
            raise ValueError(f"value is negative: {value!r}")
        return int(value)
    raise ValueError(f"value can't be converted to an unsigned integer: {value!r}")


def _as_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (bool, int, float)):
        return bool(value)
    raise ValueError(f"value can't be converted to a bool: {value!r}")


@dataclass
class BiomeCompoundData:
    """How much of a compound a biome holds and how it is spread."""

    amount: float = 0.0
    density: float = 1.0
    dissolved: float = 0.0


@dataclass
class ChunkCompoundData:
    """A compound contained in a chunk."""

    amount: float = 0.0
    name: str = ""


@dataclass
class ChunkMeshData:
    """A mesh and the texture drawn on it."""

    mesh: str
    texture: str


@dataclass
class ChunkData:
    """A kind of floating chunk that spawns in a biome."""

    name: str = ""
    density: float = 1.0
    dissolves: bool = True
    radius: int = 0
    chunk_scale: float = 1.0
    mass: int = 0
    size: int = 0
    vent_amount: float = 3.0
    damages: float = 0.0
    delete_on_touch: bool = False
    meshes: list[ChunkMeshData] = field(default_factory=list)
    chunk_compounds: dict[int, ChunkCompoundData] = field(default_factory=dict)

    def get_compound(self, compound_id: int) -> ChunkCompoundData:
        """Return the chunk's data for a compound, adding an empty entry if absent."""
        return self.chunk_compounds.setdefault(compound_id, ChunkCompoundData())

    def compound_keys(self) -> list[int]:
        """Return the compound ids of this chunk in ascending order."""
        return sorted(self.chunk_compounds)

    def _mesh_at(self, index: int, what: str) -> ChunkMeshData:
        if 0 <= index < len(self.meshes):
            return self.meshes[index]
        raise IndexError(f"{what} at index {index} does not exist!")

    def get_mesh(self, index: int) -> str:
        """Return the mesh name at index."""
        return self._mesh_at(index, "Mesh").mesh

    def get_texture(self, index: int) -> str:
        """Return the texture name at index."""
        return self._mesh_at(index, "Texture").texture


def _chunk_from_json(value: Mapping[str, Any], compounds: JsonRegistry) -> ChunkData:
    chunk = ChunkData(
        name=json_as_string(value.get("name")),
        density=_as_float(value.get("density")),
        dissolves=_as_bool(value.get("dissolves")),
    )
    chunk.radius = _as_uint(value.get("radius"))
    chunk.chunk_scale = _as_float(value.get("chunkScale"))
    chunk.mass = _as_uint(value.get("mass"))
    chunk.size = _as_uint(value.get("size"))
    chunk.vent_amount = _as_float(value.get("ventAmount"))
    chunk.damages = _as_float(value.get("damages"))
    chunk.delete_on_touch = _as_bool(value.get("deleteOnTouch"))

    chunk_compounds = _as_object(value.get("compounds"), "chunk compounds")
    for compound_name in sorted(chunk_compounds):
        data = _as_object(chunk_compounds[compound_name], compound_name)
        # Amounts are whole units.
        amount = float(int(_as_float(data.get("amount"))))
        compound_id = compounds.get_type_data(compound_name).id
        chunk.chunk_compounds.setdefault(
            compound_id, ChunkCompoundData(amount, compound_name)
        )

    meshes = value.get("meshes")
    if meshes is not None:
        if not isinstance(meshes, list):
            raise ValueError("chunk meshes is not an array")
        for mesh in meshes:
            mesh_data = _as_object(mesh, "mesh")
            chunk.meshes.append(
                ChunkMeshData(
                    json_as_string(mesh_data.get("mesh")),
                    json_as_string(mesh_data.get("texture")),
                )
            )
    return chunk


@dataclass
class Biome(RegistryType):
    """Environment settings, compounds and chunks of a biome."""

    compounds: dict[int, BiomeCompoundData] = field(default_factory=dict)
    chunks: dict[int, ChunkData] = field(default_factory=dict)
    background: str = "error"
    skybox: str = "error"
    skybox_light_intensity: float = 0.0
    sunlight_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    sunlight_intensity: float = 0.0
    sunlight_direction: tuple[float, float, float] = (0.0, 0.0, 0.0)
    sunlight_source_radius: float = 0.0
    average_temperature: float = 0.0
    # Valid range for both is [0.0, 10.0].
    min_eye_adaptation: float = 0.003
    max_eye_adaptation: float = 2.0

    @classmethod
    def from_json(cls, value: Mapping[str, Any], compounds: JsonRegistry) -> "Biome":
        """Build a biome, resolving compound names through ``compounds``."""
        value = _as_object(value, "biome")
        biome = cls()
        biome.background = json_as_string(value.get("background"))
        biome.skybox = json_as_string(value.get("skybox"))
        biome.skybox_light_intensity = _as_float(value.get("skyboxLightIntensity"))

        sunlight = _as_object(value.get("sunlight"), "sunlight")
        color = _as_object(sunlight.get("color"), "sunlight color")
        direction = _as_object(sunlight.get("direction"), "sunlight direction")
        biome.sunlight_color = (
            _as_float(color.get("r")),
            _as_float(color.get("g")),
            _as_float(color.get("b")),
        )
        biome.sunlight_intensity = _as_float(sunlight.get("intensity"))
        biome.sunlight_direction = (
            _as_float(direction.get("x")),
            _as_float(direction.get("y")),
            _as_float(direction.get("z")),
        )
        biome.sunlight_source_radius = _as_float(sunlight.get("sourceRadius"))

        eye = _as_object(value.get("eyeAdaptation"), "eyeAdaptation")
        biome.min_eye_adaptation = _as_float(eye.get("min"))
        biome.max_eye_adaptation = _as_float(eye.get("max"))

        biome.average_temperature = _as_float(value.get("averageTemperature"))

        compound_data = _as_object(value.get("compounds"), "compounds")
        for compound_name in sorted(compound_data):
            data = _as_object(compound_data[compound_name], compound_name)
            compound_id = compounds.get_type_data(compound_name).id
            biome.compounds.setdefault(
                compound_id,
                BiomeCompoundData(
                    _as_float(data.get("amount")),
                    _as_float(data.get("density")),
                    _as_float(data.get("dissolved")),
                ),
            )

        chunk_data = _as_object(value.get("chunks"), "chunks")
        for chunk_id, chunk_name in enumerate(sorted(chunk_data)):
            biome.chunks[chunk_id] = _chunk_from_json(
                _as_object(chunk_data[chunk_name], chunk_name), compounds
            )
        return biome

    def get_compound(self, compound_id: int) -> BiomeCompoundData | None:
        """Return the biome's data for a compound, or None."""
        return self.compounds.get(compound_id)

    def compound_keys(self) -> list[int]:
        """Return the compound ids of this biome in ascending order."""
        return sorted(self.compounds)

    def get_chunk(self, chunk_id: int) -> ChunkData:
        """Return a chunk type, adding an empty one if absent."""
        return self.chunks.setdefault(chunk_id, ChunkData())

    def chunk_keys(self) -> list[int]:
        """Return the chunk ids of this biome in ascending order."""
        return sorted(self.chunks)

    def to_json(self, compounds: JsonRegistry, full: bool = False) -> dict[str, Any]:
        """Return a JSON-ready description of this biome."""
        result = super().to_json()
        result["background"] = self.background
        result["skybox"] = self.skybox
        result["skyboxLightIntensity"] = self.skybox_light_intensity
        result["sunlightIntensity"] = self.sunlight_intensity
        result["sunlightSourceRadius"] = self.sunlight_source_radius
        r, g, b = self.sunlight_color
        result["sunlightColor"] = {"r": r, "g": g, "b": b}
        x, y, z = self.sunlight_direction
        result["sunlightDirection"] = {"x": x, "y": y, "z": z}

        compounds_data: dict[str, Any] = {}
        for compound_id, data in sorted(self.compounds.items()):
            compound = compounds.get_type_data(compounds.get_internal_name(compound_id))
            compounds_data[compound.internal_name] = {
                "name": compound.display_name,
                "amount": data.amount,
                "density": data.density,
                "dissolved": data.dissolved,
            }

        result["chunks"] = [
            {
                "name": chunk.name,
                "density": chunk.density,
                "compounds": [
                    {"name": compound.name, "amount": compound.amount}
                    for _, compound in sorted(chunk.chunk_compounds.items())
                ],
            }
            for _, chunk in sorted(self.chunks.items())
        ]
        result["temperature"] = self.average_temperature
        result["compounds"] = compounds_data

        if full:
            logger.warning("Biome: to_json: full is not implemented")
        return result