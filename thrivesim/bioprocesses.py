"""Processes that turn input compounds into output compounds."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from thrivesim.registry import JsonRegistry, RegistryType


@dataclass
class BioProcess(RegistryType):
    """Compound amounts consumed and produced, keyed by compound id."""

    inputs: dict[int, float] = field(default_factory=dict)
    outputs: dict[int, float] = field(default_factory=dict)

    @classmethod
    def from_json(
        cls, value: Mapping[str, Any], compounds: JsonRegistry
    ) -> "BioProcess":
        """Build a process, resolving compound names through ``compounds``."""

        def resolve(section: Any) -> dict[int, float]:
            resolved: dict[int, float] = {}
            for name in sorted(section or {}):
                compound_id = compounds.get_type_data(name).id
                resolved.setdefault(compound_id, float(section[name]))
            return resolved

        return cls(
            inputs=resolve(value.get("inputs")),
            outputs=resolve(value.get("outputs")),
        )