[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eggbot"
version = "0.1.0"
description = "Serial control of a MaxArm robot arm, a bounded FIFO and register layouts for MPU-6050 and AK8963 sensors"
requires-python = ">=3.10"
keywords = ["robotics", "serial", "robot arm", "uart", "bit fields", "registers", "mpu6050", "ak8963"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["eggbot"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
