"""Setup configuration for plantir"""

from setuptools import setup, find_packages

setup(
    name="plantir",
    version="0.1.0",
    description=(
        "CLI tool listing open GitHub pull requests waiting for your review "
        "or with new activity since you reviewed them."
    ),
    author="plantir Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
        "rich>=13.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "plantir=plantir.main:main",
        ],
    },
)
