[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dotenvy"
version = "0.15.7"
description = "Load environment variables from a .env file"
requires-python = ">=3.10"
keywords = ["dotenv", "env", "environment", "settings", "config"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Utilities",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dotenvy = "dotenvy.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dotenvy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
