[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unisonphys"
version = "0.1.0"
description = "2D rigid body physics with circle and box colliders, collision groups and mesh generation"
requires-python = ">=3.10"
dependencies = []
keywords = ["physics", "2d", "rigid-body", "collision", "simulation", "mesh", "game"]
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
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["unisonphys"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
