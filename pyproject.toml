[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sqlindexer"
version = "0.1.0"
description = "Index CREATE TABLE statements in SQL dump files and show their columns and a sample row"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "dump", "index", "schema", "create-table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sqlindexer = "sqlindexer.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sqlindexer"]

[tool.pytest.ini_options]
addopts = "-ra"
