[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sfit"
version = "1.0.0"
description = "Sine-fitting periodogram for light curves with DC offsets, external parameters and per-segment amplitudes"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["periodogram", "light curve", "least squares", "astronomy", "time series"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Astronomy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sfit"]

[tool.pytest.ini_options]
addopts = "-ra"
