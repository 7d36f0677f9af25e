# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="mal",
    version="0.1.0",
    description="A small Lisp interpreter with macros, tail calls and exceptions",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["mal", "mal.*"]),
    package_data={"mal": ["prelude/*.mal"]},
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["mal = mal.__main__:main"],
    },
    zip_safe=False,
)
