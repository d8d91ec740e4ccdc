[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gamedevtools"
version = "0.1.0"
description = "Developer diagnostics for games: caller-aware debug logging, a gameplay event log with CSV export, and a sampled memory usage estimator."
requires-python = ">=3.10"
dependencies = []
keywords = ["gamedev", "logging", "debugging", "diagnostics", "telemetry", "memory"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Logging",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Debuggers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gamedevtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
