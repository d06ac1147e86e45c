"""Specify package code and data for snapp_prep."""

from setuptools import find_packages, setup

setup(
    name="snapp_prep",
    version="1.0.0",
    description="Prepare SNAPP input from PHYLIP alignments or VCF genotypes",
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pandas",
        "pyyaml",
    ],
    extras_require={
        "dev": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "snapp_prep=snapp_prep.cli.snapp_prep:main",
        ],
    },
    package_data={
        "snapp_prep.data.example": ["*"],
    },
    packages=find_packages(exclude=["tests*"]),
)
