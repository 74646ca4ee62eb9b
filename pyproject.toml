[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "filesniff"
version = "0.1.0"
description = "Identify file types from their contents: text encodings, DER, CSV and filesystem metadata"
requires-python = ">=3.10"
keywords = ["file", "magic", "mime", "encoding", "detection", "der", "csv"]
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
    "Topic :: Utilities",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["filesniff"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
