[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minirc"
version = "0.1.0"
description = "A minimal one-to-one chat server and client speaking a small length-prefixed binary protocol over TCP"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "irc", "tcp", "protocol", "client", "server"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minirc-server = "minirc.server:main"
minirc-client = "minirc.client:main"

[tool.hatch.build.targets.wheel]
packages = ["minirc"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
