#!/usr/bin/env python3
"""
Setup configuration for Lyric-Finder
Song lyrics from a freeform query, served over a small web interface
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "aiohttp>=3.13",
    "lyricsgenius>=3.0.1",
    "jinja2>=3.1.2",
    "click>=8.1.7",
    "pyyaml>=6.0.1",
    "python-dotenv>=1.0.0",
    "colorama>=0.4.6",
]

setup(
    name="lyric-finder",
    version="1.0.0",
    author="Lyric-Finder Team",
    description="Find song lyrics from a freeform query, with provider fallback and cleanup",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["lyric_finder", "lyric_finder.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Web Environment",
        "Framework :: AsyncIO",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "lyric-finder=lyric_finder.main:cli",
        ],
    },
    include_package_data=True,
    package_data={
        "lyric_finder": ["web/templates/*.html", "web/static/css/*.css", "web/static/js/*.js"],
    },
    keywords="lyrics lrclib genius aiohttp web",
)
