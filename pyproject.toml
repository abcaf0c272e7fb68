[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hearthrogue"
version = "0.1.0"
description = "Entity-component game logic for a tile-based role-playing game: items, crafting, combat, equipment, fishing and animations."
requires-python = ">=3.10"
dependencies = []
keywords = ["roguelike", "rpg", "game", "ecs", "crafting", "fishing"]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["hearthrogue"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
