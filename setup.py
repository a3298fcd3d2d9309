from __future__ import annotations

import os
from pathlib import Path

from setuptools import setup


BASE_DIR = Path(__file__).resolve().parent


def read_version() -> str:
    """Read the version, preferring the PKG_VERSION environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    return "0.1.0"


setup(
    name="cgrep",
    version=read_version(),
    description="Approximate phrase search over the files of a directory.",
    long_description="Approximate phrase search over the files of a directory, scored by bigram Jaccard similarity.",
    long_description_content_type="text/plain",
    packages=["cgrep"],
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "pyahocorasick",
        "Levenshtein",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["cgrep=cgrep.cli:main"],
    },
)
