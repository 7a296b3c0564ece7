[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dvfsqueue"
version = "0.1.0"
description = "Markov-chain and birth-death models of multi-server queues with DVFS speed levels: chain generation, stationary solvers and energy metrics"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "markov chain",
    "queueing",
    "dvfs",
    "energy",
    "stationary distribution",
    "gth",
    "power iteration",
    "birth-death process",
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
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dvfsqueue-generate = "dvfsqueue.generator:main"
dvfsqueue-tgf = "dvfsqueue.tgf:main"
dvfsqueue-gth = "dvfsqueue.gth:main"
dvfsqueue-sparse-gth = "dvfsqueue.sparse_gth:main"
dvfsqueue-power = "dvfsqueue.power:main"
dvfsqueue-marginal = "dvfsqueue.marginal:main"
dvfsqueue-convert = "dvfsqueue.convert:main"
dvfsqueue-reorder = "dvfsqueue.reorder:main"
dvfsqueue-heatmap = "dvfsqueue.heatmap:main"
dvfsqueue-mmc = "dvfsqueue.mmc:main"
dvfsqueue-two-level = "dvfsqueue.two_level:main"
dvfsqueue-finite-levels = "dvfsqueue.finite_levels:main"
dvfsqueue-ring = "dvfsqueue.ring:main"

[tool.hatch.build.targets.wheel]
packages = ["dvfsqueue"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
