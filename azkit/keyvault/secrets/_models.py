"""
Models of the Key Vault secrets client.

The first half mirrors the json the service sends and receives (timestamps are
unix seconds on the wire). The second half is what the client hands back to
callers, flattened into a single properties object per secret; see _bundle.py
for the mapping between the two.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Dict, Optional

from pydantic import BaseModel, Field, PlainSerializer

from ...core.models import WireModel


def _to_unix_time(value: datetime) -> int:
    return int(value.timestamp())


# Parsed from, and sent as, integer seconds since the epoch.
UnixTime = Annotated[datetime, PlainSerializer(_to_unix_time, return_type=int)]


class DeletionRecoveryLevel(str, Enum):
    """
    Reflects the deletion recovery level currently in effect for secrets in
    the vault.
    """

    PURGEABLE = "Purgeable"
    RECOVERABLE_PURGEABLE = "Recoverable+Purgeable"
    RECOVERABLE = "Recoverable"
    RECOVERABLE_PROTECTED_SUBSCRIPTION = "Recoverable+ProtectedSubscription"
    CUSTOMIZED_RECOVERABLE_PURGEABLE = "CustomizedRecoverable+Purgeable"
    CUSTOMIZED_RECOVERABLE = "CustomizedRecoverable"
    CUSTOMIZED_RECOVERABLE_PROTECTED_SUBSCRIPTION = (
        "CustomizedRecoverable+ProtectedSubscription"
    )


################################################################################
# Wire models.
################################################################################


class SecretAttributes(WireModel):
    enabled: Optional[bool] = None
    not_before: Optional[UnixTime] = Field(default=None, alias="nbf")
    expires: Optional[UnixTime] = Field(default=None, alias="exp")
    # read only
    created: Optional[UnixTime] = None
    updated: Optional[UnixTime] = None
    recovery_level: Optional[DeletionRecoveryLevel] = Field(
        default=None, alias="recoveryLevel"
    )


class SecretBundle(WireModel):
    """
    A secret version consisting of a value, an id and its attributes.
    """

    value: Optional[str] = None
    id: Optional[str] = None
    content_type: Optional[str] = Field(default=None, alias="contentType")
    attributes: Optional[SecretAttributes] = None
    tags: Optional[Dict[str, str]] = None
    # If this is a secret backing a KV certificate, then this field specifies
    # the corresponding key backing the KV certificate.
    kid: Optional[str] = None
    # True if the secret's lifetime is managed by key vault, e.g. a secret
    # backing a certificate.
    managed: Optional[bool] = None


class DeletedSecretBundle(SecretBundle):
    """
    A deleted secret, with the information needed to recover it and the date
    it is scheduled to be purged.
    """

    recovery_id: Optional[str] = Field(default=None, alias="recoveryId")
    scheduled_purge_date: Optional[UnixTime] = Field(
        default=None, alias="scheduledPurgeDate"
    )
    deleted_date: Optional[UnixTime] = Field(default=None, alias="deletedDate")


class SecretItem(WireModel):
    """
    The secret item containing secret metadata, as returned by list
    operations. Items never carry the secret value.
    """

    id: Optional[str] = None
    attributes: Optional[SecretAttributes] = None
    tags: Optional[Dict[str, str]] = None
    content_type: Optional[str] = Field(default=None, alias="contentType")
    managed: Optional[bool] = None


class DeletedSecretItem(SecretItem):
    recovery_id: Optional[str] = Field(default=None, alias="recoveryId")
    scheduled_purge_date: Optional[UnixTime] = Field(
        default=None, alias="scheduledPurgeDate"
    )
    deleted_date: Optional[UnixTime] = Field(default=None, alias="deletedDate")


class SecretSetParameters(WireModel):
    value: str
    tags: Optional[Dict[str, str]] = None
    content_type: Optional[str] = Field(default=None, alias="contentType")
    secret_attributes: Optional[SecretAttributes] = Field(
        default=None, alias="attributes"
    )


class SecretUpdateParameters(WireModel):
    content_type: Optional[str] = Field(default=None, alias="contentType")
    secret_attributes: Optional[SecretAttributes] = Field(
        default=None, alias="attributes"
    )
    tags: Optional[Dict[str, str]] = None


class BackupSecretResult(WireModel):
    # base64url encoded backup blob
    value: Optional[str] = None


class SecretRestoreParameters(WireModel):
    secret_bundle_backup: str = Field(alias="value")


################################################################################
# Client models.
################################################################################


class SecretProperties(BaseModel):
    """
    The properties of a secret version: everything but its value.

    The deletion related fields (recovery_id, scheduled_purge_date, deleted_on)
    are only set on the properties of a deleted secret.
    """

    vault_url: str
    id: str
    name: str
    version: Optional[str] = None
    enabled: Optional[bool] = None
    not_before: Optional[datetime] = None
    expires_on: Optional[datetime] = None
    created_on: Optional[datetime] = None
    updated_on: Optional[datetime] = None
    recovery_level: Optional[DeletionRecoveryLevel] = None
    content_type: Optional[str] = None
    tags: Optional[Dict[str, str]] = None
    key_id: Optional[str] = None
    managed: Optional[bool] = None
    recovery_id: Optional[str] = None
    scheduled_purge_date: Optional[datetime] = None
    deleted_on: Optional[datetime] = None


class KeyVaultSecret(BaseModel):
    """
    A secret: its name, its value and the properties of the version that holds
    the value. Secrets built from list operations carry no value.
    """

    name: str
    value: Optional[str] = None
    properties: SecretProperties

    @property
    def id(self) -> str:
        return self.properties.id


class DeletedSecret(KeyVaultSecret):
    """
    A secret in the deleted state. It can be recovered with
    begin_recover_deleted_secret() until it is purged.
    """

    @property
    def recovery_id(self) -> Optional[str]:
        return self.properties.recovery_id

    @property
    def scheduled_purge_date(self) -> Optional[datetime]:
        return self.properties.scheduled_purge_date

    @property
    def deleted_on(self) -> Optional[datetime]:
        return self.properties.deleted_on
