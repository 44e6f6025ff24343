[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "assistkit"
version = "0.1.0"
description = "Typed request and response models for assistant threads, runs, vector stores, speech and streamed events"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "assistants",
    "threads",
    "runs",
    "vector-stores",
    "server-sent-events",
    "rate-limit",
    "text-to-speech",
]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["assistkit"]

[tool.hatch.build.targets.sdist]
include = ["assistkit", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
