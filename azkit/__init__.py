# flake8: noqa
"""
The azkit python library: synchronous clients for Azure Key Vault secrets and
a set of Azure Resource Manager services.
"""

from ._version import __version__

from .core.credentials import StaticTokenCredential, get_credential
from .core.exceptions import (
    AzkitError,
    ClientAuthenticationError,
    DecodeError,
    HttpResponseError,
    PollingTimeoutError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from .keyvault.secrets import SecretClient
