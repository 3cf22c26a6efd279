[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "romsx"
version = "0.1.0"
description = "Finite-difference kernels for a terrain-following regional ocean model"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["ocean", "model", "finite-difference", "sigma-coordinate", "hydrostatic", "numpy"]
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
    "Topic :: Scientific/Engineering :: Oceanography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["romsx"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
