[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "melradar"
version = "0.1.0"
description = "A small missile flight and radar tracking simulation"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "radar", "missile", "trajectory", "game"]
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
test = ["pytest"]

[project.scripts]
melradar = "melradar.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["melradar"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
