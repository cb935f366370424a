[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskboard"
version = "0.1.0"
description = "Users, projects and tasks kept in SQLite, with table, service, document, form and list-view layers."
requires-python = ">=3.10"
dependencies = []
keywords = ["projects", "tasks", "users", "crud", "optimistic-locking", "sqlite"]
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
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["taskboard"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
