"""
The ProfileRecord class manages the local azkit profile, so that the CLI user
does not have to pass the vault url, the subscription and the credential type
on every call. The record lives in {AZKIT_CACHE_DIR}/profile.yaml and is
written by `azk profile set`.
"""

import os
from threading import Lock
from typing import Optional

import yaml
from pydantic import BaseModel

from . import config


class LocalProfile(BaseModel):
    vault_url: Optional[str] = None
    subscription_id: Optional[str] = None
    credential_type: Optional[str] = None
    tenant_id: Optional[str] = None
    client_id: Optional[str] = None


class ProfileRecord(object):
    """
    Internal class to manage the local profile record.
    """

    _singleton_record: LocalProfile = LocalProfile()
    # global lock for reading and writing the profile file
    _rw_lock = Lock()

    def __init__(self):
        raise RuntimeError("ProfileRecord should not be instantiated.")

    @classmethod
    def _load_profile_record(cls):
        if config.PROFILE_FILE.exists():
            with cls._rw_lock:
                with open(config.PROFILE_FILE) as f:
                    content = yaml.safe_load(f) or {}
                cls._singleton_record = LocalProfile(**content)
        else:
            cls._singleton_record = LocalProfile()

    @classmethod
    def reload(cls):
        """
        Reloads the local profile record.
        """
        cls._load_profile_record()

    @classmethod
    def _save_to_file(cls):
        if not config.CACHE_DIR.exists():
            config.CACHE_DIR.mkdir(parents=True)
        with cls._rw_lock:
            with open(config.PROFILE_FILE, "w") as f:
                yaml.safe_dump(cls._singleton_record.model_dump(exclude_none=True), f)

    @classmethod
    def set(cls, **fields: Optional[str]):
        """
        Updates the given fields of the profile and saves it. Fields passed as
        None are left unchanged; pass an empty string to clear a field.
        """
        for key, value in fields.items():
            if key not in LocalProfile.model_fields:
                raise ValueError(f"Unknown profile field {key}.")
            if value is None:
                continue
            setattr(cls._singleton_record, key, value or None)
        cls._save_to_file()

    @classmethod
    def current(cls) -> LocalProfile:
        return cls._singleton_record

    @classmethod
    def clear(cls):
        cls._singleton_record = LocalProfile()
        cls._save_to_file()

    @classmethod
    def vault_url(cls, explicit: Optional[str] = None) -> Optional[str]:
        """
        Resolves the vault url: the explicit value, then AZKIT_VAULT_URL, then
        the profile.
        """
        return (
            explicit
            or os.environ.get(config.ENV_VAULT_URL)
            or cls._singleton_record.vault_url
        )

    @classmethod
    def subscription_id(cls, explicit: Optional[str] = None) -> Optional[str]:
        return (
            explicit
            or os.environ.get(config.ENV_SUBSCRIPTION_ID)
            or cls._singleton_record.subscription_id
        )


# When importing, read the content of the profile file as initialization.
ProfileRecord._load_profile_record()
