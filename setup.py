"""
setup.py for installing the intexport Python package.

The package is pure Python:
    pip install -e .

Development tools and the test suite:
    pip install -e ".[dev]"
    pytest tests/python
"""

from setuptools import find_packages, setup

setup(
    name="intexport",
    version="0.1.0",
    description="Grid, step-count and model-binding configuration for exported embedded integrators",
    packages=find_packages(include=["intexport", "intexport.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "hypothesis>=6.0",
            "black>=23.0",
            "ruff>=0.1.0",
            "mypy>=1.0",
        ],
    },
)
