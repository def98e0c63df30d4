[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "padsynthkit"
version = "0.1.0"
description = "Toolkit-free building blocks for a PADsynth-style synthesizer: stereo reverb, palette themes, parameter controls, program banks and harmonic editing."
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "padsynth", "reverb", "freeverb", "audio", "palette", "midi programs", "harmonics"]
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["padsynthkit"]

[tool.pytest.ini_options]
addopts = "-ra"
