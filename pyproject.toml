[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jdruby"
version = "0.1.0"
description = "Ruby compiler building blocks: source spans, diagnostics, errors, tagged values, method table, AST, HIR lowering and optimization"
requires-python = ">=3.10"
dependencies = []
keywords = ["ruby", "compiler", "ast", "ir", "optimizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jdruby"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
