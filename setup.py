"""
Setup configuration for eww-workspaces.

Workspace indicator backend for eww status bars on sway and i3.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read long description from README if it exists
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="eww-workspaces",
    version="1.0.0",
    description="Workspace indicator widget backend for eww on sway and i3",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="NixOS Configuration Team",
    author_email="",
    packages=find_packages(include=["eww_workspaces", "eww_workspaces.*"]),
    install_requires=[
        "pydantic>=2.0",
    ],
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "eww-workspaces=eww_workspaces.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
        ],
    },
)
