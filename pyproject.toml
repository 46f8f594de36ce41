[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "peasantquest"
version = "1.0.0"
description = "A small tile-based puzzle game: collect every item, then reach the exit."
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["game", "puzzle", "tiles", "xpm", "pygame"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: End Users/Desktop",
    "Topic :: Games/Entertainment :: Puzzle Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
peasantquest = "peasantquest.app:main"

[tool.hatch.build.targets.wheel]
packages = ["peasantquest"]

[tool.pytest.ini_options]
addopts = "-ra"
