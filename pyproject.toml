[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gbamkit"
version = "0.1.0"
description = "GBAM building blocks: CIGAR handling, BED parsing, block codecs, block statistics, flagstat and depth"
requires-python = ">=3.10"
keywords = ["bioinformatics", "bam", "gbam", "cigar", "bed", "flagstat", "depth", "coverage"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]
dependencies = [
    "brotli",
    "zstandard",
    "lz4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gbamkit"]

[tool.pytest.ini_options]
addopts = "-ra"
