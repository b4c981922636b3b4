# SPDX-License-Identifier: MIT
# Copyright (c) 2025 xero-identity contributors

"""Setup configuration for xero-identity package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="xero-identity",
    version="0.1.0",
    author="xero-identity contributors",
    description="Xero OAuth2 identity provider adapter with tenant-aware identity resolution",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["xero_identity", "xero_identity.*", "xero_logging", "xero_logging.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.27.0",  # For Xero token and API requests
        "pydantic>=2.4.0",  # For configuration and payload validation
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
        ],
    },
)
