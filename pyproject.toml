[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minitcp"
version = "0.1.0"
description = "TCP building blocks in plain Python: byte streams, reassembly, wrapping sequence numbers, sender and receiver logic, and a small HTTP fetch tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "networking", "byte-stream", "reassembler", "sequence-numbers", "retransmission", "protocol"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
webget = "minitcp.webget:main"

[tool.hatch.build.targets.wheel]
packages = ["minitcp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
