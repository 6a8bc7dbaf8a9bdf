[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scanfmt"
version = "0.5.0"
description = "Human-readable formatting of Etherscan-style block explorer API responses"
requires-python = ">=3.10"
keywords = ["ethereum", "blockchain", "etherscan", "explorer", "json-rpc", "formatting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Utilities",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scanfmt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
