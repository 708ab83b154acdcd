# flake8: noqa
"""
Azure Key Vault secrets.
"""

from ._client import SecretClient
from ._identifier import KeyVaultIdentifier, parse_key_vault_identifier
from ._models import (
    DeletedSecret,
    DeletionRecoveryLevel,
    KeyVaultSecret,
    SecretProperties,
)
from ._polling import DeleteSecretPoller, RecoverDeletedSecretPoller
