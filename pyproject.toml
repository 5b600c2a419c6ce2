[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "swaprouter"
version = "0.1.0"
description = "Hex encoding, 256-bit integer math, Keccak-256 hashes, checksummed addresses, logging and key-value storage helpers for a cross-chain swap router"
requires-python = ">=3.10"
keywords = ["hex", "ethereum", "address", "keccak", "big-integer", "key-value", "logging"]
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
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["swaprouter"]

[tool.pytest.ini_options]
addopts = "-ra"
