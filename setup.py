"""
Setup script for the vessel safety analysis package.
"""

from setuptools import find_packages, setup

requirements = [
    "numpy>=1.21",
    "pandas>=1.5",
    "pydantic>=2.0",
    "hydra-core>=1.3",
]

setup(
    name="vessel-safety",
    version="0.1.0",
    description="Collision risk, vessel behavior and navigation safety analysis over AIS snapshots",
    packages=find_packages(include=["vessel_safety", "vessel_safety.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering",
    ],
    python_requires=">=3.10",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "geopy>=2.0",
            "black>=21.0",
            "isort>=5.0",
            "flake8>=3.8",
            "mypy>=0.800",
        ],
    },
)
