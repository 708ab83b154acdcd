"""
Shaping of the service's secret bundles and items into the client models.

Every destination field is assigned exactly once, from a named source field:

    attributes.exp     -> expires_on
    attributes.nbf     -> not_before
    attributes.created -> created_on
    attributes.updated -> updated_on
    deletedDate        -> deleted_on
    kid                -> key_id

vault_url, name and version come from the parsed id.
"""

from typing import Union

from ._identifier import parse_key_vault_identifier
from ._models import (
    DeletedSecret,
    DeletedSecretBundle,
    DeletedSecretItem,
    KeyVaultSecret,
    SecretAttributes,
    SecretBundle,
    SecretItem,
    SecretProperties,
)


def _properties(source: Union[SecretBundle, SecretItem]) -> SecretProperties:
    identifier = parse_key_vault_identifier(source.id)
    attributes = source.attributes or SecretAttributes()
    properties = SecretProperties(
        vault_url=identifier.vault_url,
        id=source.id,
        name=identifier.name,
        version=identifier.version,
        enabled=attributes.enabled,
        not_before=attributes.not_before,
        expires_on=attributes.expires,
        created_on=attributes.created,
        updated_on=attributes.updated,
        recovery_level=attributes.recovery_level,
        content_type=source.content_type,
        tags=source.tags,
        managed=source.managed,
    )
    if isinstance(source, SecretBundle):
        properties.key_id = source.kid
    if isinstance(source, (DeletedSecretBundle, DeletedSecretItem)):
        properties.recovery_id = source.recovery_id
        properties.scheduled_purge_date = source.scheduled_purge_date
        properties.deleted_on = source.deleted_date
    return properties


def secret_from_bundle(bundle: SecretBundle) -> KeyVaultSecret:
    """
    Returns a DeletedSecret for deleted bundles and a KeyVaultSecret otherwise.
    Raises DecodeError if the bundle's id is not a secret identifier.
    """
    properties = _properties(bundle)
    cls = DeletedSecret if isinstance(bundle, DeletedSecretBundle) else KeyVaultSecret
    return cls(name=properties.name, value=bundle.value, properties=properties)


def properties_from_item(item: SecretItem) -> SecretProperties:
    return _properties(item)


def deleted_secret_from_item(item: DeletedSecretItem) -> DeletedSecret:
    properties = _properties(item)
    return DeletedSecret(name=properties.name, properties=properties)
