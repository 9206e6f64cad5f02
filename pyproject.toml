[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vinac"
version = "0.1.0"
description = "A small file archiver with optional LZ77 compression of members"
requires-python = ">=3.10"
dependencies = []
keywords = ["archive", "archiver", "lz77", "compression"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
vinac = "vinac.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["vinac"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
target-version = "py310"
line-length = 88
