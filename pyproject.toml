[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "thrivesim"
version = "0.1.0"
description = "Evolution simulation core: hex grids, data registries, biomes, player state and an auto-evolution runner"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "evolution", "hex-grid", "game", "auto-evo"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["thrivesim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"
