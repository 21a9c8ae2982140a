[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "tilefloor"
version = "0.1.0"
description = "Floorplanner that places soft modules around fixed ones on a corner-stitched tile plane, minimising weighted HPWL"
requires-python = ">=3.10"
dependencies = []
keywords = ["floorplanning", "corner stitching", "eda", "hpwl", "placement"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Electronic Design Automation (EDA)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tilefloor = "tilefloor.cli:main"

[tool.setuptools.packages.find]
include = ["tilefloor*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
