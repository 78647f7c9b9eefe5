"""Multi layered microbe stage backgrounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from thrivesim.registry import RegistryType, json_as_string


@dataclass
class Background(RegistryType):
    """A background made of one or more texture layers."""

    layers: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, value: Mapping[str, Any]) -> "Background":
        """Build a background from its JSON description.

        ``textures`` may be a single string or a non-empty array.
        """
        textures = value.get("textures")
        if isinstance(textures, str):
            return cls(layers=[textures])
        if not isinstance(textures, list):
            raise ValueError("object has no textures or it is not an array")
        if not textures:
            raise ValueError("textures array is empty")
        return cls(layers=[json_as_string(texture) for texture in textures])