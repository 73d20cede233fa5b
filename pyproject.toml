[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zfsdhv"
version = "1.0.0"
description = "Nomad dynamic host volume plugin that provisions volumes as ZFS datasets"
requires-python = ">=3.10"
dependencies = []
keywords = ["nomad", "zfs", "dynamic host volume", "storage", "plugin"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
zfsdhv = "zfsdhv.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["zfsdhv"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
