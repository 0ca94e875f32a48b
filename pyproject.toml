[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minihttpd"
version = "0.1.0"
description = "A small HTTP/1.0 server with a handful of utility endpoints"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "http/1.0", "socket", "router", "fibonacci", "sha256"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minihttpd = "minihttpd.app:main"

[tool.hatch.build.targets.wheel]
packages = ["minihttpd"]

[tool.hatch.build.targets.sdist]
include = ["minihttpd", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
