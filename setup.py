from setuptools import find_packages, setup

setup(
    name="doclinks",
    version="0.1.0",
    description="doclinks - scheduled link checking for documentation trees",
    packages=find_packages(include=["doclinks", "doclinks.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "typer<0.26",  # CLI framework (0.26+ vendors click; code uses click contexts directly)
        "click",  # Used directly for CLI exceptions/context
        "pydantic>=2",  # Config and output schemas
        "rich",  # Terminal formatting
        "pyyaml",  # YAML command output
        "requests",  # Remote link checks
        "jinja2",  # Template rendering for reports
    ],
    extras_require={
        "test": [
            "pytest>=7.0",  # Testing framework
            "pytest-timeout>=2.1",  # Test timeouts
            "pytest-xdist>=3.0",  # Parallel test execution
            "ruff",  # Linting and formatting
            "mypy",  # Static type checking
            "types-requests",  # Type stubs
            "types-PyYAML",  # Type stubs
        ],
    },
    entry_points={
        "console_scripts": [
            "doclinks=doclinks.cli:main",
        ],
    },
)
