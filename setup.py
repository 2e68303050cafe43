from setuptools import setup, find_packages

setup(
    name="pdbread",
    version="0.1.0",
    description="Column-exact PDB reader: atoms, connectivity, secondary structure and BIOMT/SMTRY operators",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    packages=find_packages(include=["pdbread", "pdbread.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "torch>=2.0.0",
        "typer>=0.9.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "streaming": [
            "fsspec>=2023.1.0",
            "s3fs>=2023.1.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdbread = pdbread.cli:app",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Topic :: Scientific/Engineering :: Chemistry",
    ],
    package_dir={"": "."},
    package_data={},
)
