[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swarmshooter"
version = "0.1.0"
description = "Building blocks for a fixed-screen arcade shooter on pygame: swarming enemies on curved paths, a swaying formation, capture beams, collisions and a starfield."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "arcade", "shooter", "pygame", "shmup", "bezier", "collision"]
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
    "Topic :: Games/Entertainment :: Arcade",
    "Topic :: Software Development :: Libraries :: pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["swarmshooter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
