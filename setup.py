"""Setup configuration for Small Batch Pricing Tracker."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="pricing-tracker",
    version="0.1.0",
    description="Recipe cost and sale price calculator for small food businesses",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(
        include=["pricing_tracker", "pricing_tracker.*"],
        exclude=["pricing_tracker.tests", "pricing_tracker.tests.*"],
    ),
    classifiers=[
        "Development Status :: 2 - Pre-Alpha",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Office/Business :: Financial",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "pricing-tracker=pricing_tracker.main:main",
        ],
    },
)
