# Copyright 2026, Aiven, https://aiven.io/
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from setuptools import setup, find_packages
import sys
import version

LATEST = [
    "requests >= 2.26.0",
    "urllib3 >= 1.26.0",
    "certifi >= 2015.11.20.1",
]

if sys.platform.startswith("linux"):
    REQUIRES = [
        # no bundled certifi as distro packages are expected to be patched to use system ca certs
        "requests >= 2.26.0",
        "urllib3 >= 1.26.0",
    ]
else:
    REQUIRES = LATEST

setup(
    author="Aiven",
    author_email="support@aiven.io",
    entry_points={
        "console_scripts": [
            "subspell = subspell.__main__:main",
        ],
    },
    extras_require={
        "completion": ["argcomplete"],
        "test": ["pytest"],
    },
    install_requires=REQUIRES,
    license="Apache 2.0",
    name="subspell",
    packages=find_packages(exclude=["tests"]),
    platforms=["POSIX", "MacOS", "Windows"],
    description="Spelling correction by symmetric deletion subsequences",
    long_description=open("README.rst").read(),
    python_requires=">=3.9",
    url="https://aiven.io/",
    version=version.get_project_version("subspell/version.py"),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Text Processing :: Linguistic",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
