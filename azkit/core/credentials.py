"""
Credentials for the azkit clients.

A credential is any object with a `get_token(*scopes, **kwargs)` method that
returns something with `token` and `expires_on` attributes. All of the
azure-identity credentials qualify, and get_credential() creates one of them
from a short credential type name.
"""

import os
import time
from typing import Any, NamedTuple, Optional

from ..config import ENV_ACCESS_TOKEN


class AccessToken(NamedTuple):
    token: str
    expires_on: int


class StaticTokenCredential(object):
    """
    A credential that always returns the same bearer token. Useful for scripts
    that already obtained a token, e.g. from `az account get-access-token`.
    """

    def __init__(self, token: str, expires_on: Optional[int] = None):
        if not token:
            raise ValueError("token must be a non-empty string.")
        self._token = token
        # An hour is the usual lifetime of an Azure AD access token.
        self._expires_on = expires_on or int(time.time()) + 3600

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        return AccessToken(self._token, self._expires_on)


def is_token_credential(credential: Any) -> bool:
    return callable(getattr(credential, "get_token", None))


CREDENTIAL_TYPES = (
    "default",
    "client_secret",
    "certificate",
    "azure_cli",
    "managed_identity",
    "token",
)


def get_credential(
    credential_type: Optional[str] = "default",
    tenant_id: Optional[str] = None,
    client_id: Optional[str] = None,
    client_secret: Optional[str] = None,
    certificate_path: Optional[str] = None,
    token: Optional[str] = None,
    send_certificate_chain: bool = False,
) -> Any:
    """
    Creates a credential from its type name.

    Args:
        credential_type:
            One of default, client_secret, certificate, azure_cli,
            managed_identity, token.
        tenant_id:
            Azure tenant id for the client_secret and certificate types.
        client_id:
            Azure client id for the client_secret, certificate and
            managed_identity types.
        client_secret:
            Client secret for the client_secret type.
        certificate_path:
            Path of a PEM certificate for the certificate type.
        token:
            Bearer token for the token type. Falls back to AZKIT_ACCESS_TOKEN.
        send_certificate_chain:
            For the certificate type, send the public certificate chain in the
            x5c header so that subject name / issuer authentication works.
    """
    credential_type = credential_type or "default"
    if credential_type == "default":
        from azure.identity import DefaultAzureCredential

        return DefaultAzureCredential()

    elif credential_type == "client_secret":
        from azure.identity import ClientSecretCredential

        if not (tenant_id and client_id and client_secret):
            raise ValueError(
                "tenant_id, client_id and client_secret are required for the"
                " client_secret credential type."
            )
        return ClientSecretCredential(
            tenant_id=tenant_id,
            client_id=client_id,
            client_secret=client_secret,
        )

    elif credential_type == "certificate":
        from azure.identity import CertificateCredential

        if not (tenant_id and client_id and certificate_path):
            raise ValueError(
                "tenant_id, client_id and certificate_path are required for the"
                " certificate credential type."
            )
        return CertificateCredential(
            tenant_id=tenant_id,
            client_id=client_id,
            certificate_path=certificate_path,
            send_certificate_chain=send_certificate_chain,
        )

    elif credential_type == "azure_cli":
        from azure.identity import AzureCliCredential

        return AzureCliCredential()

    elif credential_type == "managed_identity":
        from azure.identity import ManagedIdentityCredential

        return ManagedIdentityCredential(client_id=client_id)

    elif credential_type == "token":
        token = token or os.environ.get(ENV_ACCESS_TOKEN)
        if not token:
            raise ValueError(
                f"The token credential type needs a token, or {ENV_ACCESS_TOKEN} set"
                " in the environment."
            )
        return StaticTokenCredential(token)

    raise ValueError(
        f"Unknown credential type {credential_type}. Valid types are"
        f" {', '.join(CREDENTIAL_TYPES)}."
    )
