[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "armsim"
version = "0.1.0"
description = "A small AArch64 CPU simulator with a five-stage MIPS-style datapath, for teaching computer architecture"
requires-python = ">=3.10"
dependencies = []
keywords = ["arm", "aarch64", "simulator", "cpu", "datapath", "computer-architecture", "teaching"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["armsim*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
