# setup.py
from setuptools import setup, find_packages

setup(
    name="sublisp",
    version="0.1.0",
    description="Curried Lisp-like expression evaluator reducing by capture-avoiding substitution",
    packages=find_packages(include=["sublisp", "sublisp.*"]),
    python_requires=">=3.10",
    extras_require={"test": ["pytest"]},
    zip_safe=False,
)
