# Copyright (c) 2025 adcl.io
# All Rights Reserved.
#
# This software is proprietary and confidential. Unauthorized copying,
# distribution, or use of this software is strictly prohibited.

"""
Setup configuration for the Composer Package Registry
"""

from setuptools import setup, find_packages

setup(
    name="composer-registry",
    version="1.0.0",
    description="Self-hosted Composer package registry with basic auth protected uploads",
    author="Jason Cafarelli",
    packages=find_packages(include=["composer_registry", "composer_registry.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110.0",
        "uvicorn>=0.27.0",
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.25.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "composer-registry=composer_registry.__main__:main",
        ],
    },
)
