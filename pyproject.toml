[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "woodquest"
version = "0.1.0"
description = "A small tile-based collect-and-escape game with .ber maps and XPM textures"
requires-python = ">=3.10"
dependencies = ["pygame"]
keywords = ["game", "tile", "maze", "xpm", "pygame"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
woodquest = "woodquest.app:main"

[tool.hatch.build.targets.wheel]
packages = ["woodquest"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
