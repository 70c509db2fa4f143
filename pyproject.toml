[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ashvale"
version = "0.1.0"
description = "Building blocks for a top-down role-playing game: tile maps, A* pathfinding, player logic and a tile map editor."
requires-python = ">=3.10"
keywords = ["game", "rpg", "pygame", "tilemap", "pathfinding", "editor"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Role-Playing",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ashvale-editor = "ashvale.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["ashvale"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
