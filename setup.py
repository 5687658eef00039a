# setup.py
from setuptools import setup, find_packages

setup(
    name="polycalc",
    version="0.1.0",
    description="Dynamically typed expression calculator with infix, prefix and postfix notations",
    packages=find_packages(include=["polycalc", "polycalc.*"]),
    python_requires=">=3.9",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["polycalc=polycalc.__main__:main"],
    },
    zip_safe=False,
)
