[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "towerdefence"
version = "0.1.0"
description = "Rules of a tower defence game (towers, enemies, economy, placement) with SQLite-backed player progress."
requires-python = ">=3.10"
dependencies = []
keywords = ["tower defence", "game", "game logic", "sqlite", "progress"]
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
    "Topic :: Games/Entertainment :: Real Time Strategy",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["towerdefence"]

[tool.pytest.ini_options]
addopts = "-ra"
