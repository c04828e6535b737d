[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tubdb"
version = "0.1.0"
description = "Building blocks of a small relational database engine: SQL values and casts, column schemas, an LRU frame replacer and string helpers."
requires-python = ">=3.10"
dependencies = []
keywords = ["database", "sql", "types", "schema", "lru", "replacer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Database Engines/Servers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tubdb"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
