[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sovmetrics"
version = "1.0.0"
description = "Secondary structure, mutational and binary classification metrics for protein structure predictions"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bioinformatics",
    "protein",
    "secondary structure",
    "SOV",
    "segment overlap",
    "Q3",
    "confusion matrix",
    "fasta",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sovmetrics = "sovmetrics.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["sovmetrics"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
