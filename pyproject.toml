[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "insulplan"
version = "0.1.0"
description = "Plan external insulation of building walls: wall merging, tiling with adhesive layers, triangulation and placement timelines."
requires-python = ">=3.10"
keywords = ["geometry", "insulation", "tiling", "triangulation", "construction", "planning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Topic :: Scientific/Engineering",
]
dependencies = [
    "shapely",
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
insulplan = "insulplan.cli:main"
insulplan-web = "insulplan.webapi:main"

[tool.hatch.build.targets.wheel]
packages = ["insulplan"]

[tool.pytest.ini_options]
addopts = "-ra"
