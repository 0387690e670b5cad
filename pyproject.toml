[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "piotercraft"
version = "0.1.0"
description = "Voxel world simulation core: chunked terrain, trees, torch lighting, raycasting and chunk streaming"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "voxel",
    "chunk",
    "terrain",
    "perlin",
    "raycasting",
    "frustum",
    "lighting",
    "sandbox",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["piotercraft"]

[tool.hatch.build.targets.sdist]
include = [
    "piotercraft",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
