# setup.py
from setuptools import setup, find_packages

setup(
    name="kappa",
    version="0.1.0",
    description="A tiny curried expression language: parser combinators and a tree-walking interpreter",
    packages=find_packages(include=["kappa", "kappa.*"]),
    python_requires=">=3.10",
    install_requires=[
        "termcolor>=2.1",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["kappa=kappa.cli:main"],
    },
    zip_safe=False,
)
