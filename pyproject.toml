[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mockweaver"
version = "0.1.0"
description = "Template-driven mock generation toolkit: type models, naming scopes, import registries and template rendering for interface mocks."
requires-python = ">=3.10"
keywords = ["mock", "mocking", "code generation", "templates", "interfaces", "testing"]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Testing :: Mocking",
]
dependencies = [
    "jinja2>=3.1",
    "jsonschema>=4.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
]

[tool.hatch.build.targets.wheel]
packages = ["mockweaver"]

[tool.hatch.build.targets.sdist]
include = ["mockweaver", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 120
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
