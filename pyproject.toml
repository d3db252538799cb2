[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "itools"
version = "0.1.0"
description = "A small script workbench with line-based syntax highlighting, a plugin-driven code runner and update checks"
requires-python = ">=3.10"
dependencies = []
keywords = ["editor", "script", "powershell", "plugins", "syntax-highlighting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Text Editors :: Integrated Development Environments (IDE)",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
itools = "itools.app:main"

[tool.hatch.build.targets.wheel]
packages = ["itools"]

[tool.pytest.ini_options]
addopts = "-ra"
