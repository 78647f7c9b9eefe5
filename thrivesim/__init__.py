"""Evolution simulation core: hex grids, registries, biomes, player state and auto-evo."""

__version__ = "0.1.0"