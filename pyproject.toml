[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "obliv"
version = "0.1.0"
description = "Oblivious algorithms: conditional moves, sorting networks, compaction, shuffling, ORAM and page storage."
requires-python = ">=3.10"
dependencies = []
keywords = ["oblivious", "oram", "circuit-oram", "sorting-network", "bitonic", "compaction", "shuffle", "privacy"]
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
    "Operating System :: OS Independent",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["obliv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
