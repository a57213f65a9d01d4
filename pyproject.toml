[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cminus"
version = "0.1.0"
description = "Syntax trees, semantic symbol tables and three-address intermediate code for a small C-like language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "syntax tree", "semantic analysis", "symbol table", "intermediate representation", "three-address code"]
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
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cminus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
