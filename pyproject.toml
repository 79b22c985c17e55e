[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ghostcore"
version = "0.1.0"
description = "Core primitives of a feeless DAG ledger: Pedersen commitments over ristretto255, conflict state, branch quorum merging and peer selection rules"
requires-python = ">=3.10"
keywords = [
    "dag",
    "ledger",
    "ristretto255",
    "pedersen-commitments",
    "consensus",
    "quorum",
    "dandelion",
]
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
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Distributed Computing",
    "Typing :: Typed",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ghostcore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
