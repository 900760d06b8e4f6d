#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup script for SteamLang

IAPWS-IF97 water/steam property engine with a ``steamlang`` command.
"""

from pathlib import Path

from setuptools import find_packages, setup

VERSION = "1.0.0"

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")
else:
    long_description = "SteamLang - IAPWS-IF97 water/steam property engine"

setup(
    name="steamlang",
    version=VERSION,
    description="IAPWS-IF97 thermodynamic properties of water and steam",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    python_requires=">=3.9",
    packages=find_packages(include=["steamlang", "steamlang.*"]),
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "numpy>=1.24",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "steamlang=steamlang.cli:main",
        ],
    },
)
