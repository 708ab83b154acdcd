# flake8: noqa
from ._client import PaloAltoNetworksCloudngfw
from . import models
