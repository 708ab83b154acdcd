# flake8: noqa
from ._client import ComputeManagementClient
from . import models
