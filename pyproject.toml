[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xmlserde"
version = "0.7.1"
description = "Serialize and deserialize annotated Python data classes to and from XML"
requires-python = ">=3.10"
dependencies = []
keywords = ["xml", "serialization", "deserialization", "dataclasses"]
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
    "Topic :: Text Processing :: Markup :: XML",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xmlserde"]

[tool.hatch.build.targets.sdist]
include = ["xmlserde", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
