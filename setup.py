#!/usr/bin/env python3
"""suideploy - Setup"""

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = f.read().splitlines()

setup(
    name="suideploy",
    version="1.0.0",
    description="Publish, upgrade and exercise a Sui Move package from the command line",
    packages=find_packages(include=["suideploy", "suideploy.*"]),
    install_requires=requirements,
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "pytest-timeout>=2.2",
        ],
    },
    entry_points={
        "console_scripts": [
            "suideploy=suideploy.main:main",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
