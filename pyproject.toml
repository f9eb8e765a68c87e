[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pongarena"
version = "0.1.0"
description = "A multithreaded Pong arcade game with three rule sets, a computer opponent and a two-player mode"
requires-python = ">=3.10"
keywords = ["pong", "arcade", "game", "pygame", "threads"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pongarena = "pongarena.app:main"

[tool.hatch.build.targets.wheel]
packages = ["pongarena"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
