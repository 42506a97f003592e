#!/usr/bin/env python3
"""
Setup script for the stepdist package.

This allows the package to be installed in development mode:
    pip install -e .

After installation, imports work uniformly without sys.path manipulation:
    from stepdist import CalibrationEngine, LocalizationConfig
    from scripts.utils.plotting import save_replay_figure
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_path = Path(__file__).parent / "README.md"
long_description = ""
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="stepdist",
    version="0.1.0",
    author="stepdist developers",
    description="Walking distance from step counts with GPS-calibrated step length",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["stepdist", "stepdist.*", "scripts", "scripts.*"]),
    py_modules=["main"],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "pandas>=1.3.0",
        "matplotlib>=3.5.0",
        "pyyaml>=6.0",
        "scikit-learn>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=22.0.0",
            "isort>=5.10.0",
            "flake8>=5.0.0",
            "mypy>=0.990",
        ],
    },
    entry_points={
        "console_scripts": [
            "stepdist-replay=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: GIS",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    keywords="pedometer, step length, gps, calibration, distance",
)
