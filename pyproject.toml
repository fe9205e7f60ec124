[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cabernet"
version = "0.1.0"
description = "A small deep-learning library with lazy computational graphs, reverse-mode gradients, layers, criterions and optimizers."
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "deep-learning",
    "neural-network",
    "autograd",
    "tensor",
    "machine-learning",
    "mnist",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cabernet-train = "cabernet.train:main"

[tool.hatch.build.targets.wheel]
packages = ["cabernet"]

[tool.hatch.build.targets.sdist]
include = [
    "cabernet",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
