[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ircserv"
version = "1.0.0"
description = "A small IRC server with channels, topics, invitations and channel modes"
requires-python = ">=3.10"
dependencies = []
keywords = ["irc", "chat", "server", "rfc1459"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat :: Internet Relay Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ircserv = "ircserv.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ircserv"]

[tool.pytest.ini_options]
addopts = "-ra"
