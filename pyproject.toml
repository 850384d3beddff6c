[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zonealloc"
version = "0.1.0"
description = "Building blocks for a simulated zone-based memory allocator: header flags, size alignment, an intrusive red-black tree and a simulated address space"
requires-python = ">=3.10"
dependencies = []
keywords = ["allocator", "memory", "red-black tree", "simulation", "zones"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zonealloc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
