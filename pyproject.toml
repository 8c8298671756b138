[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orusvm"
version = "0.1.0"
description = "A small register virtual machine with an assembler and a lexer for the Orus language"
requires-python = ">=3.10"
dependencies = []
keywords = ["virtual machine", "assembler", "lexer", "interpreter", "bytecode"]
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
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["orusvm"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
