[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dabparse"
version = "0.1.0"
description = "Decoders for DAB FIG type 0 signalling, X-PAD and MOT data groups"
requires-python = ">=3.10"
dependencies = []
keywords = ["dab", "digital radio", "fig", "fic", "mot", "x-pad", "pad", "broadcast"]
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
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["dabparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
