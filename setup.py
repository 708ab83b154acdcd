import os
import re

from setuptools import setup, find_packages

here = os.path.dirname(os.path.realpath(__file__))

with open(os.path.join(here, "azkit", "requirements.txt")) as f:
    requirements = f.read().splitlines()

with open(os.path.join(here, "azkit", "_version.py")) as f:
    version = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

setup(
    name="azkit",
    version=version,
    description="Azure Key Vault secrets and Resource Manager clients",
    packages=find_packages(include=["azkit", "azkit.*"]),
    package_data={"azkit": ["requirements.txt"]},
    install_requires=requirements,
    extras_require={"test": ["pytest"]},
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "azk = azkit.cli:azk",
        ],
    },
)
