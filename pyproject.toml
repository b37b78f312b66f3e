[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rlt"
version = "0.5.0"
description = "An asyncio load testing library: concurrent workers, warm-ups, rate limits and rolling statistics"
requires-python = ">=3.11"
dependencies = []
keywords = ["performance", "load-testing", "benchmark", "asyncio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Framework :: AsyncIO",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing :: Traffic Generation",
    "Topic :: System :: Benchmark",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["rlt"]

[tool.hatch.build.targets.sdist]
include = ["rlt", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
