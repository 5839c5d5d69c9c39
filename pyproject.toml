[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clif"
version = "1.0.0"
description = "Framework for building command line applications with commands, options, styled output, interactive input and dependency injection"
requires-python = ">=3.10"
dependencies = []
keywords = ["cli", "command line", "console", "framework", "arguments", "options", "dependency injection"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Software Development :: User Interfaces",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["clif"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
