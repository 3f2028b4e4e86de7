[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "comfykit"
version = "0.1.0"
description = "2D game helpers: timers, tweens, seeded randomness, spatial hashing and queued mesh and text draw calls."
requires-python = ">=3.10"
dependencies = []
keywords = ["gamedev", "2d", "timer", "tween", "spatial-hash", "mesh", "render-queue"]
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
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["comfykit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
