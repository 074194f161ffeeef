[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spacebagarre"
version = "0.1.0"
description = "Game logic for a two-player arcade brawler: physics world, players, coins, match timer, rollback state and wire packets."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "arcade", "rollback", "netcode", "physics", "multiplayer"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["spacebagarre"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
