from __future__ import annotations

import os
from pathlib import Path

from setuptools import setup


BASE_DIR = Path(__file__).resolve().parent


def read_version() -> str:
    """Read the version, preferring the environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    for line in (BASE_DIR / "named_bools" / "__init__.py").read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("\"'")
    return "0.0.1"


setup(
    name="named-bools",
    version=read_version(),
    description="Named, bit-addressable boolean containers with fixed or growable capacity.",
    long_description="Named, bit-addressable boolean containers with fixed or growable capacity.",
    long_description_content_type="text/plain",
    packages=["named_bools"],
    python_requires=">=3.8",
    install_requires=[
        "pyahocorasick",
        "Levenshtein",
    ],
)
