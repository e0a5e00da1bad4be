[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "sysmon"
version = "0.1.0"
description = "Terminal system monitor showing CPU, memory and network usage from /proc"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitor", "cpu", "memory", "network", "curses", "procfs"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
sysmon = "sysmon.cli:main"

[tool.setuptools.packages.find]
include = ["sysmon*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
