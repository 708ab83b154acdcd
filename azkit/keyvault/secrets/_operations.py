"""
The Key Vault secrets REST operations, one OperationSpec per operation.
"""

from typing import Dict

from ...core.models import Page
from ...core.operation import Location, OperationSpec, Parameter
from ._models import (
    BackupSecretResult,
    DeletedSecretBundle,
    DeletedSecretItem,
    SecretBundle,
    SecretItem,
)

_VAULT_BASE_URL = Parameter(
    "vault_base_url",
    Location.PATH,
    serialized_name="vaultBaseUrl",
    client=True,
    skip_quote=True,
)
_API_VERSION = Parameter(
    "api_version", Location.QUERY, serialized_name="api-version", client=True
)
_SECRET_NAME = Parameter(
    "secret_name",
    Location.PATH,
    serialized_name="secret-name",
    pattern=r"^[0-9a-zA-Z-]+$",
)
# An empty version addresses the latest version.
_SECRET_VERSION = Parameter(
    "secret_version", Location.PATH, serialized_name="secret-version"
)
_MAX_RESULTS = Parameter(
    "max_results", Location.QUERY, serialized_name="maxresults", required=False
)
_BODY = Parameter("parameters", Location.BODY)


KEY_VAULT_OPERATIONS: Dict[str, OperationSpec] = {
    spec.name: spec
    for spec in (
        OperationSpec(
            name="set_secret",
            method="PUT",
            url="{vaultBaseUrl}/secrets/{secret-name}",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _API_VERSION, _BODY),
            responses={200: SecretBundle},
        ),
        OperationSpec(
            name="delete_secret",
            method="DELETE",
            url="{vaultBaseUrl}/secrets/{secret-name}",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _API_VERSION),
            responses={200: DeletedSecretBundle},
        ),
        OperationSpec(
            name="update_secret",
            method="PATCH",
            url="{vaultBaseUrl}/secrets/{secret-name}/{secret-version}",
            parameters=(
                _VAULT_BASE_URL,
                _SECRET_NAME,
                _SECRET_VERSION,
                _API_VERSION,
                _BODY,
            ),
            responses={200: SecretBundle},
        ),
        OperationSpec(
            name="get_secret",
            method="GET",
            url="{vaultBaseUrl}/secrets/{secret-name}/{secret-version}",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _SECRET_VERSION, _API_VERSION),
            responses={200: SecretBundle},
        ),
        OperationSpec(
            name="get_secrets",
            method="GET",
            url="{vaultBaseUrl}/secrets",
            parameters=(_VAULT_BASE_URL, _MAX_RESULTS, _API_VERSION),
            responses={200: Page[SecretItem]},
        ),
        OperationSpec(
            name="get_secret_versions",
            method="GET",
            url="{vaultBaseUrl}/secrets/{secret-name}/versions",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _MAX_RESULTS, _API_VERSION),
            responses={200: Page[SecretItem]},
        ),
        OperationSpec(
            name="get_deleted_secrets",
            method="GET",
            url="{vaultBaseUrl}/deletedsecrets",
            parameters=(_VAULT_BASE_URL, _MAX_RESULTS, _API_VERSION),
            responses={200: Page[DeletedSecretItem]},
        ),
        OperationSpec(
            name="get_deleted_secret",
            method="GET",
            url="{vaultBaseUrl}/deletedsecrets/{secret-name}",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _API_VERSION),
            responses={200: DeletedSecretBundle},
        ),
        OperationSpec(
            name="purge_deleted_secret",
            method="DELETE",
            url="{vaultBaseUrl}/deletedsecrets/{secret-name}",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _API_VERSION),
            responses={204: None},
        ),
        OperationSpec(
            name="recover_deleted_secret",
            method="POST",
            url="{vaultBaseUrl}/deletedsecrets/{secret-name}/recover",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _API_VERSION),
            responses={200: SecretBundle},
        ),
        OperationSpec(
            name="backup_secret",
            method="POST",
            url="{vaultBaseUrl}/secrets/{secret-name}/backup",
            parameters=(_VAULT_BASE_URL, _SECRET_NAME, _API_VERSION),
            responses={200: BackupSecretResult},
        ),
        OperationSpec(
            name="restore_secret",
            method="POST",
            url="{vaultBaseUrl}/secrets/restore",
            parameters=(_VAULT_BASE_URL, _API_VERSION, _BODY),
            responses={200: SecretBundle},
        ),
    )
}
