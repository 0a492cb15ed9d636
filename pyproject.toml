[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duelgame"
version = "0.1.0"
description = "A small 2D sprite-based duel game with frame-based input, logging and profiling helpers"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "2d", "sprites", "fighting", "pygame"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
duelgame = "duelgame.game:main"

[tool.hatch.build.targets.wheel]
packages = ["duelgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
