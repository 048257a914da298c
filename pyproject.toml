[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "icefactory"
version = "0.1.0"
description = "An ice-cream factory simulation of mutual exclusion, shared memory and TCP client/server messaging"
requires-python = ">=3.10"
dependencies = []
keywords = ["threads", "lock", "shared-memory", "sockets", "teaching", "simulation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
icefactory = "icefactory.factory:main"
icefactory-shm = "icefactory.shm_layout:main"
icefactory-counters = "icefactory.counters:main"
icefactory-server = "icefactory.server:main"
icefactory-client = "icefactory.client:main"

[tool.hatch.build.targets.wheel]
packages = ["icefactory"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
