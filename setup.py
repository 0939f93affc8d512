"""
arenaset: Generic Interning Arenas for Python

Assigns each distinct value a small bounded integer ID with:
1. Free-list slot reuse
2. Bounded, numpy-dtype backed ID types with overflow detection
3. Pluggable hash or ordered key maps
4. Compaction with old-to-new ID remapping
5. Double-indirection arenas over shared handles
"""

from setuptools import setup, find_packages

setup(
    name="arenaset",
    version="0.4.0",
    description="Generic interning arenas with bounded IDs, slot reuse and compaction",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    packages=find_packages(include=["arenaset", "arenaset.*"]),
    install_requires=[
        "numpy>=1.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "tabulate>=0.9",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
