[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "combparse"
version = "0.1.0"
description = "Building blocks for parser combinators: error types, input streams, parse state, labels and extension parsers"
requires-python = ">=3.10"
dependencies = []
keywords = ["parser", "combinator", "parsing", "errors", "spans"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["combparse"]

[tool.pytest.ini_options]
addopts = "-ra"
