[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lutro"
version = "0.1.0"
description = "Game runtime pieces: WAV streaming, audio sources and mixing, input maps, image data and game-directory file access"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["game", "audio", "mixer", "wav", "input", "keyboard", "joystick", "image"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Sound/Audio :: Mixers",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lutro"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
