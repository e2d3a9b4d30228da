[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynkit"
version = "0.1.0"
description = "DynamoDB helpers: attribute values, key schemas, table descriptions, expressions and item rendering"
requires-python = ">=3.10"
keywords = ["dynamodb", "attribute-value", "expressions", "key-schema", "table", "yaml"]
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
    "Topic :: Database :: Front-Ends",
]
dependencies = [
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dynkit"]

[tool.pytest.ini_options]
addopts = "-ra"
