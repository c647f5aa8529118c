[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plymesh"
version = "2.3.4"
description = "Read and write PLY polygon mesh files in ASCII and binary encodings"
requires-python = ">=3.10"
dependencies = []
keywords = ["ply", "mesh", "3d", "point-cloud", "polygon", "file-format"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
plymesh-example = "plymesh.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["plymesh"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
