#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Setup script for quartiles generator package.
"""

from setuptools import setup
from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="quartiles-generator",
    version="1.0.0",
    author="TrailLensCo",
    description="AI-themed quartiles word puzzle generator",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/TrailLensCo/quartilesgenerator",
    package_dir={"": "src"},
    py_modules=[
        "ai_word_generator",
        "chunk_splitter",
        "config",
        "game_state",
        "logging_config",
        "models",
        "prompt_loader",
        "puzzle_assembler",
        "puzzle_exporter",
        "puzzle_generator",
        "response_parser",
        "retry",
        "scoring",
        "stats_store",
        "word_dictionary",
    ],
    python_requires=">=3.10",
    install_requires=[
        "anthropic>=0.75.0",
        "pyyaml>=6.0.2",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quartiles=puzzle_generator:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Games/Entertainment :: Puzzle Games",
    ],
)
