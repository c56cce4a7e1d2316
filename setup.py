# Copyright 2026 Canonical Ltd.  This software is licensed under the
# GNU Affero General Public License version 3 (see the file LICENSE).

"""Setuptools installer for IPAM."""

from os.path import dirname, join

from setuptools import find_packages, setup


def read(filename):
    """Return the whitespace-stripped content of `filename`."""
    path = join(dirname(__file__), filename)
    with open(path, "r") as fin:
        return fin.read().strip()


setup(
    name="ipam",
    version="0.1.0",
    license="AGPLv3",
    description="IP Address Management for IPv4 subnets",
    long_description=read("README.rst"),
    author="IPAM Developers",
    packages=find_packages(
        where="src",
        exclude=["tests", "tests.*"],
    ),
    package_dir={"": "src"},
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "aiosqlite>=0.19",
        "asyncpg>=0.29",
        "fastapi>=0.110",
        "netaddr>=0.10",
        "pydantic>=2.5",
        "python-json-logger>=2.0",
        "PyYAML>=6.0",
        "SQLAlchemy[asyncio]>=2.0.25",
        "structlog>=23.2",
        "uvicorn>=0.27",
    ],
    extras_require={
        "testing": [
            "httpx>=0.26",
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
            "pytest-mock>=3.12",
        ],
    },
    entry_points={
        "console_scripts": [
            "ipam-apiserver = ipamapiserver.main:run",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Information Technology",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU Affero General Public License v3",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Topic :: System :: Networking",
    ],
)
