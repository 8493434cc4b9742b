[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "splashsurf"
version = "0.10.0"
description = "Helpers for SPH surface reconstruction workflows: bounding boxes, option parsing, file sequences, logging and post-processing weights"
requires-python = ">=3.10"
dependencies = []
keywords = ["sph", "particle", "surface", "reconstruction", "marching-cubes"]
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
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["splashsurf"]

[tool.pytest.ini_options]
addopts = "-ra"
