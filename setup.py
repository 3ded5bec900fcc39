#!/usr/bin/env python3

__version__ = '1.0.0'

import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

with open('requirements.txt') as f:
    required = [line for line in f.read().splitlines() if line and not line.startswith('#')]

setuptools.setup(
    name="callkit",
    version=__version__,
    description="Indel error rate models and gVCF block compression for germline small variant calling",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    python_requires=">=3.10",
    install_requires=required,
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "callkit=callkit.cli:run",
        ],
    },
)
