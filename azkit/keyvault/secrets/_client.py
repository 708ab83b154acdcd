import base64
import os
from datetime import datetime
from typing import Any, Dict, Iterable, Optional

import requests
from loguru import logger

from ...config import DEFAULT_TIMEOUT, ENV_VAULT_URL, KEYVAULT_API_VERSION
from ...core.client import ServiceClient, build_pipeline
from ...core.credentials import is_token_credential
from ...core.exceptions import DecodeError
from ...core.paging import ItemPaged
from ...core.pipeline import HTTPPolicy
from ...core.policies import KeyVaultChallengePolicy
from ...core.polling import PollerState, PollStatus
from ._bundle import deleted_secret_from_item, properties_from_item, secret_from_bundle
from ._models import (
    DeletedSecret,
    KeyVaultSecret,
    SecretAttributes,
    SecretProperties,
    SecretRestoreParameters,
    SecretSetParameters,
    SecretUpdateParameters,
)
from ._operations import KEY_VAULT_OPERATIONS as _OPS
from ._polling import DeleteSecretPoller, RecoverDeletedSecretPoller

# Key Vault diagnostic headers whose values are logged as is.
_KEY_VAULT_LOGGED_HEADERS = (
    "x-ms-keyvault-region",
    "x-ms-keyvault-network-info",
    "x-ms-keyvault-service-version",
)


def _attributes(
    enabled: Optional[bool],
    not_before: Optional[datetime],
    expires_on: Optional[datetime],
) -> Optional[SecretAttributes]:
    if enabled is None and not_before is None and expires_on is None:
        return None
    return SecretAttributes(enabled=enabled, not_before=not_before, expires=expires_on)


class SecretClient(ServiceClient):
    """
    A client for the secrets of one Azure Key Vault.

    Example usage:

        from azkit.core.credentials import get_credential
        from azkit.keyvault.secrets import SecretClient

        client = SecretClient(
            "https://myvault.vault.azure.net", get_credential("azure_cli")
        )
        client.set_secret("db-password", "s3cr3t")
        print(client.get_secret("db-password").value)

    The first request to the vault is sent without credentials: the vault
    answers with the scope its tokens must have, and the client authenticates
    from then on.
    """

    def __init__(
        self,
        vault_url: Optional[str] = None,
        credential: Any = None,
        api_version: str = KEYVAULT_API_VERSION,
        *,
        policies: Optional[Iterable[HTTPPolicy]] = None,
        user_agent: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
        polling_interval: Optional[float] = None,
    ):
        """
        :param vault_url: the url of the vault, e.g.
            https://myvault.vault.azure.net. Falls back to AZKIT_VAULT_URL.
        :param credential: an object with a get_token(*scopes) method, such as
            the azure-identity credentials.
        :param policies: replaces the default pipeline policies. The Key Vault
            authentication policy is added unless one of them is a bearer token
            policy.
        :param polling_interval: default seconds between polls of the pollers
            returned by begin_* methods.
        """
        vault_url = vault_url or os.environ.get(ENV_VAULT_URL)
        if not vault_url:
            raise ValueError(
                f"vault_url must be given, or {ENV_VAULT_URL} set in the environment."
            )
        if credential is None:
            raise ValueError("credential cannot be None.")
        if not is_token_credential(credential):
            raise ValueError("credential must have a get_token() method.")
        self.vault_url: str = vault_url.rstrip("/")
        self.api_version = api_version
        self._polling_interval = polling_interval
        pipeline = build_pipeline(
            KeyVaultChallengePolicy(credential),
            api_version,
            policies=policies,
            user_agent=user_agent,
            logging_allowed_headers=_KEY_VAULT_LOGGED_HEADERS,
            session=session,
            timeout=timeout,
        )
        super().__init__(
            pipeline, vault_base_url=self.vault_url, api_version=api_version
        )

    def set_secret(
        self,
        name: str,
        value: str,
        *,
        enabled: Optional[bool] = None,
        not_before: Optional[datetime] = None,
        expires_on: Optional[datetime] = None,
        content_type: Optional[str] = None,
        tags: Optional[Dict[str, str]] = None,
    ) -> KeyVaultSecret:
        """
        Sets a secret. If the secret already exists, a new version is created.
        Requires the secrets/set permission.
        """
        parameters = SecretSetParameters(
            value=value,
            tags=tags,
            content_type=content_type,
            secret_attributes=_attributes(enabled, not_before, expires_on),
        )
        bundle = self.send_operation_request(
            _OPS["set_secret"], secret_name=name, parameters=parameters
        )
        return secret_from_bundle(bundle)

    def get_secret(self, name: str, version: Optional[str] = None) -> KeyVaultSecret:
        """
        Gets a secret, in its latest version unless `version` is given. Requires
        the secrets/get permission.
        """
        bundle = self.send_operation_request(
            _OPS["get_secret"], secret_name=name, secret_version=version or ""
        )
        return secret_from_bundle(bundle)

    def update_secret_properties(
        self,
        name: str,
        version: Optional[str] = None,
        *,
        enabled: Optional[bool] = None,
        not_before: Optional[datetime] = None,
        expires_on: Optional[datetime] = None,
        content_type: Optional[str] = None,
        tags: Optional[Dict[str, str]] = None,
    ) -> SecretProperties:
        """
        Updates the properties of a secret version. The value cannot be changed:
        use set_secret() to create a new version instead. Properties that are
        not given are left unchanged.
        """
        parameters = SecretUpdateParameters(
            content_type=content_type,
            secret_attributes=_attributes(enabled, not_before, expires_on),
            tags=tags,
        )
        bundle = self.send_operation_request(
            _OPS["update_secret"],
            secret_name=name,
            secret_version=version or "",
            parameters=parameters,
        )
        return secret_from_bundle(bundle).properties

    def _delete_secret(self, name: str) -> DeletedSecret:
        bundle = self.send_operation_request(_OPS["delete_secret"], secret_name=name)
        return secret_from_bundle(bundle)  # type: ignore

    def begin_delete_secret(
        self,
        name: str,
        *,
        polling_interval: Optional[float] = None,
        continuation_token: Optional[str] = None,
    ) -> DeleteSecretPoller:
        """
        Deletes all the versions of a secret. The delete request is sent before
        this method returns; call result() on the returned poller to wait until
        the vault serves the secret as deleted. Requires the secrets/delete
        permission.

        :param continuation_token: resumes the operation a previous poller
            started, as returned by its continuation_token(). Nothing is sent
            until the poller is polled again.
        """
        if continuation_token:
            state = DeleteSecretPoller.state_from_token(continuation_token, name)
        else:
            state = PollerState(operation=DeleteSecretPoller.operation, name=name)
        poller = DeleteSecretPoller(
            self,
            state,
            polling_interval=(
                polling_interval
                if polling_interval is not None
                else self._polling_interval
            ),
        )
        if poller.status() == PollStatus.NOT_STARTED:
            poller.poll()
        return poller

    def get_deleted_secret(self, name: str) -> DeletedSecret:
        """
        Gets a deleted secret with its recovery information. Only available in
        vaults with soft delete enabled. Requires the secrets/get permission.
        """
        bundle = self.send_operation_request(
            _OPS["get_deleted_secret"], secret_name=name
        )
        return secret_from_bundle(bundle)  # type: ignore

    def purge_deleted_secret(self, name: str) -> None:
        """
        Permanently deletes a deleted secret. It cannot be recovered afterwards.
        Requires the secrets/purge permission.
        """
        self.send_operation_request(_OPS["purge_deleted_secret"], secret_name=name)
        logger.debug(f"Purged deleted secret {name}")

    def _recover_deleted_secret(self, name: str) -> SecretProperties:
        bundle = self.send_operation_request(
            _OPS["recover_deleted_secret"], secret_name=name
        )
        return secret_from_bundle(bundle).properties

    def begin_recover_deleted_secret(
        self,
        name: str,
        *,
        polling_interval: Optional[float] = None,
        continuation_token: Optional[str] = None,
    ) -> RecoverDeletedSecretPoller:
        """
        Recovers a deleted secret to its latest version. Works the same way as
        begin_delete_secret(). Requires the secrets/recover permission.
        """
        if continuation_token:
            state = RecoverDeletedSecretPoller.state_from_token(
                continuation_token, name
            )
        else:
            state = PollerState(
                operation=RecoverDeletedSecretPoller.operation, name=name
            )
        poller = RecoverDeletedSecretPoller(
            self,
            state,
            polling_interval=(
                polling_interval
                if polling_interval is not None
                else self._polling_interval
            ),
        )
        if poller.status() == PollStatus.NOT_STARTED:
            poller.poll()
        return poller

    def backup_secret(self, name: str) -> bytes:
        """
        Returns a backup of all the versions of a secret, in a protected form
        that can only be restored into a vault of the same subscription.
        """
        result = self.send_operation_request(_OPS["backup_secret"], secret_name=name)
        if result is None or result.value is None:
            raise DecodeError(f"The backup of secret {name} has no value.")
        encoded = result.value
        try:
            return base64.urlsafe_b64decode(encoded + "=" * (-len(encoded) % 4))
        except ValueError as e:
            raise DecodeError(f"The backup of secret {name} is not base64url.") from e

    def restore_secret_backup(self, backup: bytes) -> SecretProperties:
        """
        Restores a backup made with backup_secret(), with all its versions.
        """
        encoded = base64.urlsafe_b64encode(backup).decode("ascii").rstrip("=")
        bundle = self.send_operation_request(
            _OPS["restore_secret"],
            parameters=SecretRestoreParameters(secret_bundle_backup=encoded),
        )
        return secret_from_bundle(bundle).properties

    def list_properties_of_secrets(
        self, *, max_page_size: Optional[int] = None, timeout: Optional[float] = None
    ) -> ItemPaged[SecretProperties]:
        """
        Lists the properties of all the secrets of the vault, in their latest
        version. Values are not included: use get_secret() for that.
        """
        return self.list_operation(
            _OPS["get_secrets"],
            convert=properties_from_item,
            page_size_param="max_results",
            max_page_size=max_page_size,
            timeout=timeout,
        )

    def list_properties_of_secret_versions(
        self,
        name: str,
        *,
        max_page_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> ItemPaged[SecretProperties]:
        """
        Lists the properties of all the versions of a secret.
        """
        return self.list_operation(
            _OPS["get_secret_versions"],
            convert=properties_from_item,
            page_size_param="max_results",
            max_page_size=max_page_size,
            timeout=timeout,
            secret_name=name,
        )

    def list_deleted_secrets(
        self, *, max_page_size: Optional[int] = None, timeout: Optional[float] = None
    ) -> ItemPaged[DeletedSecret]:
        """
        Lists the deleted secrets of the vault. Only available in vaults with
        soft delete enabled.
        """
        return self.list_operation(
            _OPS["get_deleted_secrets"],
            convert=deleted_secret_from_item,
            page_size_param="max_results",
            max_page_size=max_page_size,
            timeout=timeout,
        )

    def __repr__(self):
        return f"<SecretClient vault_url={self.vault_url}>"
