[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ecehero"
version = "1.0.0"
description = "A terminal match-3 puzzle game with bonus pieces, timed levels and a save file"
requires-python = ">=3.10"
keywords = ["game", "match-3", "puzzle", "terminal", "console"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: French",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ecehero = "ecehero.game:main"
ecehero-lab = "ecehero.lab:main"

[tool.hatch.build.targets.wheel]
packages = ["ecehero"]

[tool.pytest.ini_options]
addopts = "-ra"
