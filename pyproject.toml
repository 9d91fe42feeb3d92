[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "planephys"
version = "0.1.0"
description = "Collision detection for flat scenes built from triangles: bounding borders, polygon models, broad and narrow phases."
requires-python = ">=3.10"
keywords = ["physics", "collision-detection", "2d", "geometry", "triangles", "sat"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["planephys"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 120
target-version = "py310"
