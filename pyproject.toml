[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pointless"
version = "0.1.0"
description = "Syntax trees, lexical scope annotation and string interning for the Pointless functional language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "functional", "language", "lexical-scope", "syntax-tree"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
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
packages = ["pointless"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
