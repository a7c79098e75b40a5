[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cminus_front"
version = "0.1.0"
description = "Syntax tree, symbol table, semantic checks and three-address code generation for a small C-minus language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "c-minus", "three-address code", "symbol table", "semantic analysis"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cminus_front"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
