#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages

with open("requirements.txt") as f:
    requirements = [line for line in f.read().splitlines() if line and not line.startswith("#")]

setup(
    name="inspectorgadget",
    version="0.1.0",
    description="Runtime text-change observation for UI trees",
    author="",
    author_email="",
    url="",
    packages=find_packages(include=["inspectorgadget", "inspectorgadget.*"]),
    entry_points={
        "console_scripts": [
            "inspectorgadget=inspectorgadget.cli:main",
        ],
    },
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Operating System :: MacOS :: MacOS X",
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Testing",
    ],
    include_package_data=True,
)
