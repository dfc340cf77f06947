[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ultrahonk"
version = "0.1.0"
description = "Verifier for UltraHonk zero-knowledge proofs over BN254"
requires-python = ">=3.10"
keywords = ["zero-knowledge", "snark", "ultrahonk", "bn254", "verifier", "kzg", "pairing"]
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
    "Topic :: Security :: Cryptography",
]
dependencies = [
    "pycryptodome",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ultrahonk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
