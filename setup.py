"""Setup script for the fifths-dash package."""

from setuptools import find_packages, setup

setup(
    name="fifths-dash",
    version="0.1.0",
    description="Terminal dashboard with a circle-of-fifths diagram and a navigable menu",
    packages=find_packages(include=["fifths_dash", "fifths_dash.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fifths-dash=fifths_dash.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console :: Curses",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
