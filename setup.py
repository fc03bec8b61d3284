"""Setup script for gcloud-inventory."""

from setuptools import find_packages, setup

setup(
    name="gcloud-inventory",
    version="0.1.0",
    description="Resolve Google Compute Engine instances into inventory targets",
    author="gcloud-inventory maintainers",
    packages=find_packages(include=["gcloud_inventory", "gcloud_inventory.*"]),
    python_requires=">=3.10",
    install_requires=[
        "httpx>=0.24.0",
        "PyJWT[crypto]>=2.8.0",
        "cryptography>=41.0.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "gcloud-inventory=gcloud_inventory.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
