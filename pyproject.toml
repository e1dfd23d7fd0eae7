[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chainregistry"
version = "0.1.0"
description = "Standard configuration types, registry paths, genesis allocation diffs and a scripted JSON-RPC mock for a rollup chain registry"
requires-python = ">=3.11"
keywords = ["rollup", "registry", "genesis", "toml", "json-rpc", "validation"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Typing :: Typed",
]
dependencies = [
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["chainregistry"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
