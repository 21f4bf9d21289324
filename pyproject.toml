[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuzzyfold"
version = "0.1.2"
description = "Nucleic acid secondary structure representations and stochastic folding kinetics."
requires-python = ">=3.10"
keywords = ["dna", "rna", "secondary-structure", "kinetics", "gillespie", "macrostates"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]
dependencies = [
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ff-randseq = "fuzzyfold.randseq:main"

[tool.hatch.build.targets.wheel]
packages = ["fuzzyfold"]

[tool.pytest.ini_options]
addopts = "-ra"
