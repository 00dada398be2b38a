[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "ezcfgmigrate"
version = "1.0.0"
description = "Convert version 0.x streaming source client XML configuration files to the version 1.x format"
requires-python = ">=3.10"
keywords = ["icecast", "streaming", "configuration", "migration", "xml"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Utilities",
]
dependencies = [
    "lxml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
ezstream-cfgmigrate = "ezcfgmigrate.migrate:main"

[tool.setuptools.packages.find]
include = ["ezcfgmigrate*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
