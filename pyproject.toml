[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "whenlang"
version = "0.1.0"
description = "Symbol table, syntax tree, decompiler, semantic checks and three-address code for a small typed teaching language."
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "semantic-analysis", "three-address-code", "ast", "symbol-table"]
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
packages = ["whenlang"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
