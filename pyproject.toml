[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "necrophage"
version = "0.1.0"
description = "Game rules for an isometric parasite action RPG: combat, enemy AI, boss encounters, camera and run reports."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "game",
    "rpg",
    "combat",
    "boss",
    "enemy-ai",
    "grid",
    "line-of-sight",
]
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
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["necrophage"]

[tool.hatch.build.targets.sdist]
include = ["necrophage", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
