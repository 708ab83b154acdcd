# flake8: noqa
from ._client import IoTFirmwareDefenseClient
from . import models
