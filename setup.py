#!/usr/bin/env python3
"""
samlink Setup Script
====================
Allows installation of the samlink package.

Usage:
    pip install -e .           # Development install
    pip install -e .[test]     # With test dependencies
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="samlink",
    version="0.1.0",
    packages=find_packages(include=["samlink", "samlink.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "samlink=samlink.cli:main",
        ],
    },
)
