[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snowsedit"
version = "0.1.0"
description = "A small terminal text editor with grapheme-aware editing, a status bar and a message bar"
requires-python = ">=3.10"
dependencies = [
    "regex",
    "wcwidth",
]
keywords = ["editor", "terminal", "text", "tui", "unicode", "grapheme"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
snowsedit = "snowsedit.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["snowsedit"]

[tool.pytest.ini_options]
addopts = "-ra"
