[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apilens"
version = "0.1.0"
description = "Lint OpenAPI and Discovery descriptions, collect their vocabularies and compare API versions"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = [
    "openapi",
    "swagger",
    "discovery",
    "lint",
    "api",
    "vocabulary",
    "json-schema",
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
    "Topic :: Software Development :: Quality Assurance",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
apilens-schemagen = "apilens.schemagen:main"

[tool.hatch.build.targets.wheel]
packages = ["apilens"]

[tool.hatch.build.targets.sdist]
include = [
    "apilens",
    "tests",
    "README.md",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
