[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gmblacklist"
version = "1.0.0"
description = "Player and IP ban list management for game servers, with timed bans and translated messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["ban", "blacklist", "game server", "moderation", "banlist"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Natural Language :: English",
    "Natural Language :: Chinese (Simplified)",
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
test = ["pytest"]

[project.scripts]
gmblacklist = "gmblacklist.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gmblacklist"]

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
