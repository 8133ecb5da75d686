[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "leggedtraj"
version = "0.1.0"
description = "Building blocks for trajectory optimization of legged robots: splines, node variables, constraints, rigid-body dynamics and gaits"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "legged robots",
    "trajectory optimization",
    "splines",
    "locomotion",
    "gait",
    "robotics",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
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
test = [
    "pytest",
    "numpy",
]

[tool.hatch.build.targets.wheel]
packages = ["leggedtraj"]

[tool.pytest.ini_options]
addopts = "-ra"
