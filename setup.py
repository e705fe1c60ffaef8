#!/usr/bin/env python3
"""Setup script for resp3kit package."""

from setuptools import setup

# Use pyproject.toml for configuration
setup()
