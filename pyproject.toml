[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "multisig"
version = "0.1.0"
description = "A multi-signature wallet program with owners, thresholds, proposals, approvals and execution on an in-memory ledger"
requires-python = ">=3.10"
dependencies = []
keywords = ["multisig", "multi-signature", "wallet", "threshold", "approval", "ledger"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["multisig"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
