# flake8: noqa
"""
This implements the CLI for the azkit library. When you install the library,
you get a command line tool called `azk` that you can use to manage the secrets
of a Key Vault and the local profile.
"""

from .cli import azk
