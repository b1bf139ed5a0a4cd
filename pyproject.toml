[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qdesktop"
version = "0.1.0"
description = "Embedded desktop core: calculator, file explorer, alarm clock service, buzzer and CPU temperature monitor"
requires-python = ">=3.10"
keywords = ["desktop", "embedded", "alarm", "calculator", "file-explorer", "buzzer", "hwmon"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]
dependencies = [
    "filelock",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
qdesktop = "qdesktop.app:main"

[tool.hatch.build.targets.wheel]
packages = ["qdesktop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
