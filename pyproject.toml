[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "subrt"
version = "0.1.0"
description = "Load, hash and compare Substrate WASM runtimes: proposal hashes, IPFS CIDs, compression and reduced runtime diffs."
requires-python = ">=3.10"
keywords = [
    "substrate",
    "runtime",
    "wasm",
    "blake2",
    "ipfs",
    "zstd",
    "diff",
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
dependencies = [
    "zstandard",
    "websocket-client",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["subrt"]

[tool.hatch.build.targets.sdist]
include = ["subrt", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
