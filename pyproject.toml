[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "larexamples"
version = "0.1.0"
description = "Example algorithms for liquid-argon detector data: isolated space point removal, truth-based tracks and reconstruction summaries"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "physics",
    "particle-physics",
    "lartpc",
    "reconstruction",
    "space-points",
    "tracking",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["larexamples"]

[tool.pytest.ini_options]
addopts = "-ra"
