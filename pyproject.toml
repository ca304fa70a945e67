[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "igfd"
version = "0.5.6"
description = "Headless file dialog model: filters, directory scanning, sorting, multi-selection and bookmarks"
requires-python = ">=3.10"
dependencies = []
keywords = ["file dialog", "file chooser", "directory chooser", "filters", "bookmarks"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["igfd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
