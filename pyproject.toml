[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hecto"
version = "0.1.0"
description = "A small terminal text editor with incremental search and Rust syntax highlighting"
requires-python = ">=3.10"
keywords = ["editor", "terminal", "text", "tui", "syntax-highlighting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]
dependencies = [
    "blessed",
    "regex",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hecto = "hecto.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["hecto"]

[tool.pytest.ini_options]
addopts = "-ra"
