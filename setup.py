# setup.py
from setuptools import setup, find_packages

setup(
    name="mal",
    version="0.4.0",
    description="A staged tree-walking interpreter for a small Lisp",
    packages=find_packages(include=["mal", "mal.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["mal=mal.repl:main"],
    },
    zip_safe=False,
)
