# flake8: noqa
from ._client import WorkloadsClient
from . import models
