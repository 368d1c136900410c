[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "helptrix"
version = "0.1.0"
description = "Business logic and framework-neutral request handlers for a marketplace connecting businesses with helpers: proposals, reviews, services and image uploads."
requires-python = ">=3.10"
dependencies = []
keywords = ["marketplace", "proposals", "reviews", "services", "uploads"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["helptrix"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
