[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "obxf"
version = "0.8.0"
description = "Building blocks of a polyphonic analog-modelling synthesizer: pulse oscillator, noise, LFO, decimators, FXB/FXP preset files and program management."
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "audio", "dsp", "lfo", "noise", "blep", "fxb", "fxp", "presets"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["obxf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
