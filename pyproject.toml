[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stwo-verifier"
version = "0.1.0"
description = "Verifier-side building blocks for circle STARK proofs: BLAKE2s Merkle commitments, query sampling and per-tree containers"
requires-python = ">=3.10"
dependencies = []
keywords = ["stark", "merkle", "blake2s", "verifier", "fri", "cryptography"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["stwo_verifier"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
