#!/usr/bin/env python3
"""
Setup script for the Session Recall Python package.
Makes the relevance engine and summarizers pip-installable.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="session-recall",
    version="1.0.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="Relevance ranking and summaries of past coding sessions",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/your-org/session-recall",
    packages=find_packages(where="scripts", exclude=["tests"]),
    package_dir={"": "scripts"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: Text Processing :: Indexing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "rank-bm25>=0.2.2",
        "numpy>=1.21.0",
        "anthropic>=0.25.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    include_package_data=True,
    package_data={
        "": [
            "config/*.json",
            "*.md",
            "*.txt",
        ],
    },
    project_urls={
        "Bug Reports": "https://github.com/your-org/session-recall/issues",
        "Source": "https://github.com/your-org/session-recall",
        "Documentation": "https://github.com/your-org/session-recall#readme",
    },
)
