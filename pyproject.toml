[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuzzytip"
version = "0.1.0"
description = "Fuzzy-logic tip rules and a small neural network trained to imitate them"
requires-python = ">=3.10"
keywords = ["fuzzy logic", "neural network", "regression", "tipping", "numpy"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]
dependencies = [
    "numpy",
    "matplotlib",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
fuzzytip = "fuzzytip.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fuzzytip"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
