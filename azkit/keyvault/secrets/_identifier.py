from typing import NamedTuple, Optional, Tuple
from urllib.parse import urlparse

from ...core.exceptions import DecodeError

SECRET_COLLECTIONS = ("secrets", "deletedsecrets")


class KeyVaultIdentifier(NamedTuple):
    vault_url: str
    collection: str
    name: str
    version: Optional[str]


def parse_key_vault_identifier(
    identifier: Optional[str], collections: Tuple[str, ...] = SECRET_COLLECTIONS
) -> KeyVaultIdentifier:
    """
    Splits a Key Vault object id of the form
    https://{vault}/{collection}/{name}[/{version}] into its parts.

    Raises DecodeError if the id does not have that form or its collection is
    not one of `collections`.
    """
    if not identifier:
        raise DecodeError("Key Vault identifier cannot be empty.")
    parsed = urlparse(identifier)
    if parsed.scheme != "https" or not parsed.netloc:
        raise DecodeError(f"'{identifier}' is not a valid Key Vault identifier.")
    segments = parsed.path.split("/")[1:]
    if len(segments) not in (2, 3):
        raise DecodeError(f"'{identifier}' is not a valid Key Vault identifier.")
    collection, name = segments[0], segments[1]
    if collection not in collections:
        raise DecodeError(
            f"'{identifier}' is not a valid Key Vault identifier: collection"
            f" '{collection}' is not one of {', '.join(collections)}."
        )
    if not name:
        raise DecodeError(
            f"'{identifier}' is not a valid Key Vault identifier: empty name."
        )
    version = segments[2] if len(segments) == 3 and segments[2] else None
    return KeyVaultIdentifier(
        vault_url=f"{parsed.scheme}://{parsed.netloc}",
        collection=collection,
        name=name,
        version=version,
    )
