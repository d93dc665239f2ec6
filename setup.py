"""
Setup script for stepchain package
"""

from setuptools import find_packages, setup


with open("requirements.txt") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

setup(
    name="stepchain",
    version="0.1.0",
    description="Function-chaining execution engine with type-driven argument resolution",
    packages=find_packages(include=["stepchain", "stepchain.*"]),
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "stepchain=stepchain.cli:main",
        ],
    },
    include_package_data=True,
    package_data={
        "stepchain": ["schema/*.json"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
