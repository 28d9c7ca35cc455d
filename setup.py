"""
Setup configuration for the texmaps package.

Version 0.1.0 - Normal, specular, displacement and ambient occlusion map
generation with a command-line interface and batch processing.
"""

from setuptools import find_packages, setup

setup(
    name="texmaps",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "pillow>=8.0.0",
        "opencv-python>=4.5.0",
        "scipy>=1.6.0",
        "typer>=0.9.0",
        "rich>=12.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "texmaps=texmaps.cli.main:main",
        ],
    },
    description="Generate normal, specular, displacement and ambient occlusion maps from textures",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics",
    ],
    python_requires=">=3.8",
)
