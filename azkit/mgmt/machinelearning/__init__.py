# flake8: noqa
from ._client import AzureMachineLearningWorkspaces
from . import models
