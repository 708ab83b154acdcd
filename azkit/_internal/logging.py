"""
Opt-in file log for azkit, kept at `{AZKIT_CACHE_DIR}/logs/internal.log`.

`log()` writes at the custom `AZKIT_INTERNAL` level, which sits below DEBUG,
so its records reach the file only and never show on the console.

The pipeline's LoggingPolicy records one line per request and per response
with their headers. Correlation ids, content headers, Location and
Azure-AsyncOperation, and the x-ms-keyvault-region, -network-info and
-service-version diagnostics of a vault keep their values; every other value,
Authorization and Set-Cookie included, is written as REDACTED unless
AZKIT_LOG_ALL_HEADERS is set.

Turning it on requires both `enable()` and AZKIT_ENABLE_INTERNAL_LOG=1 in the
environment, because it writes to disk.
"""

import os

from loguru import logger

from ..config import LOGS_DIR

_LEVEL = "AZKIT_INTERNAL"
_LOGFILE_BASE = LOGS_DIR / "internal.log"
_HANDLER_ID = None
_enabled: bool = False

# just below loguru's DEBUG (10)
logger.level(name=_LEVEL, no=9)


def _allowed_by_env() -> bool:
    return os.environ.get("AZKIT_ENABLE_INTERNAL_LOG", "0").lower() in ("1", "true")


def enable():
    """
    Adds the rotating file sink. Safe to call repeatedly; does nothing when the
    environment does not allow it.
    """
    global _enabled
    global _HANDLER_ID

    if _enabled or not _allowed_by_env():
        return
    _HANDLER_ID = logger.add(
        _LOGFILE_BASE,
        level=_LEVEL,
        colorize=False,
        rotation="10 MB",
        retention=3,
        compression="zip",
    )
    _enabled = True


def disable():
    """Removes the file sink added by enable(), if any."""
    global _enabled
    global _HANDLER_ID

    if not _enabled:
        return
    if _HANDLER_ID is not None:
        logger.remove(_HANDLER_ID)
        _HANDLER_ID = None
    _enabled = False


def is_enabled() -> bool:
    return _enabled


def log(*args, **kwargs):
    if _enabled:
        logger.opt(depth=1).log(_LEVEL, *args, **kwargs)
