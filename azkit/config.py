"""
Overall configurations and constants for the azkit python library.
"""

import os
from pathlib import Path

from ._version import __version__

# Cache directory for azkit's local state: the CLI profile record and internal
# logs. In cases like unit testing, you can change this to a different
# directory via the environment variable `AZKIT_CACHE_DIR`, BEFORE IMPORTING
# AZKIT.
#
# Implementation note: the cache directory is not created at import time. It
# is created lazily the first time something needs to be written into it.
CACHE_DIR = Path(os.environ.get("AZKIT_CACHE_DIR", Path.home() / ".cache" / "azkit"))
LOGS_DIR = CACHE_DIR / "logs"
PROFILE_FILE = CACHE_DIR / "profile.yaml"


def _to_bool(s: str) -> bool:
    """
    Convert a string to a boolean value.
    """
    if not isinstance(s, str):
        raise TypeError(f"Expected a string, got {type(s)}")
    true_values = ("yes", "true", "t", "1", "y", "on")
    false_values = ("no", "false", "f", "0", "n", "off", "")
    s = s.lower()
    if s in true_values:
        return True
    elif s in false_values:
        return False
    else:
        raise ValueError(
            f"Invalid boolean value: {s}. Valid true values: {true_values}. Valid false"
            f" values: {false_values}."
        )


def _float_from_env(name: str, default: float) -> float:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        result = float(value)
    except ValueError:
        print(
            f"You have set an invalid value for {name} {value}. Using default value"
            f" of {default} seconds."
        )
        return default
    if result < 0:
        print(
            f"You have set a negative value for {name} {value}. Using default value"
            f" of {default} seconds."
        )
        return default
    return result


################################################################################
# Configurations you can change to customize azkit's behavior.
################################################################################

# Timeout, in seconds, for every single HTTP request sent by a client. This is
# handed to requests as-is, so it bounds connect and read separately. Set the
# environment variable `AZKIT_DEFAULT_TIMEOUT` to change it.
DEFAULT_TIMEOUT = _float_from_env("AZKIT_DEFAULT_TIMEOUT", 120)

# Seconds to wait between two polls of a long running operation, unless the
# caller passes `polling_interval` or the service sends a Retry-After header.
DEFAULT_POLLING_INTERVAL = _float_from_env("AZKIT_POLLING_INTERVAL", 2)

# The resource manager endpoint used by all the ARM clients. Sovereign clouds
# use a different host, e.g. https://management.chinacloudapi.cn.
ARM_ENDPOINT = os.environ.get("AZKIT_ARM_ENDPOINT", "https://management.azure.com")

# Optional prefix prepended to the User-Agent header of every request.
USER_AGENT_PREFIX = os.environ.get("AZKIT_USER_AGENT", "")

# Whether request and response headers should be logged with their values.
# Values of headers outside of the allow list are redacted unless this is set.
LOG_ALL_HEADERS = _to_bool(os.environ.get("AZKIT_LOG_ALL_HEADERS", "false"))

################################################################################
# azkit internals. Do not change these as they will change the behavior of the
# library and the wire format.
################################################################################

# The Key Vault data plane API version the secrets client speaks.
KEYVAULT_API_VERSION = "7.0"

# Tokens are refreshed this many seconds before they expire.
TOKEN_REFRESH_MARGIN = 300

SDK_MONIKER = f"azkit/{__version__}"

# Environment variables that the clients use to locate their target when it is
# not given explicitly.
ENV_VAULT_URL = "AZKIT_VAULT_URL"
ENV_SUBSCRIPTION_ID = "AZKIT_SUBSCRIPTION_ID"
ENV_ACCESS_TOKEN = "AZKIT_ACCESS_TOKEN"
