[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jenkinsmcp"
version = "0.1.0"
description = "Model Context Protocol server pieces, PKCE helpers and console output utilities for working with Jenkins"
requires-python = ">=3.10"
dependencies = []
keywords = ["jenkins", "mcp", "json-rpc", "pkce", "ci", "cli", "notifications"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jenkinsmcp"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
