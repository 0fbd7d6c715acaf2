#!/usr/bin/env python3
"""
Setup script for the pyx card importer

Installs the shared models/readers (pyx_shared) and the importer service (card_importer)
from the backend/ directory.
"""

from setuptools import setup, find_packages

setup(
    name="pyx-card-importer",
    version="0.1.0",
    description="Import black and white cards from spreadsheets into deck listings",
    package_dir={"": "backend"},
    packages=find_packages("backend", exclude=["*.tests", "*.tests.*", "tests"]),
    python_requires=">=3.9",
    install_requires=[
        # 📋 Data Validation & Settings
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "python-dotenv>=1.0.0",

        # 📊 Spreadsheets (rich text cells need openpyxl 3.1)
        "openpyxl>=3.1.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pyx-card-importer=card_importer.main:main",
        ],
    },
)
