[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ketu"
version = "0.1.0"
description = "Simulation of autonomous nodes that sense each other and anneal into a grid formation"
requires-python = ">=3.10"
dependencies = []
keywords = ["swarm", "simulation", "formation", "robotics", "nodes"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ketu = "ketu.scenario:main"

[tool.hatch.build.targets.wheel]
packages = ["ketu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
