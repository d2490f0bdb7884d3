[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "galaksija"
version = "0.2.2"
description = "Tools for Galaksija tape images: build GTP files, render them to WAV, dump character ROMs and convert graymaps"
requires-python = ">=3.10"
dependencies = []
keywords = ["galaksija", "gtp", "tape", "wav", "retrocomputing", "z80"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Conversion",
    "Topic :: System :: Emulators",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bin2gtp = "galaksija.bin2gtp:main"
gtp2wav = "galaksija.gtp2wav:main"
chargendump = "galaksija.chargendump:main"
pgm2scr = "galaksija.pgm2scr:main"

[tool.hatch.build.targets.wheel]
packages = ["galaksija"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
