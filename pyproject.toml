[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "statusline"
version = "1.0.0"
description = "A small status monitor that joins system readings such as CPU, memory and time into one status line"
requires-python = ">=3.10"
keywords = ["status", "statusbar", "monitor", "system", "cpu", "memory", "battery"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Utilities",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
statusline = "statusline.status:main"

[tool.hatch.build.targets.wheel]
packages = ["statusline"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
