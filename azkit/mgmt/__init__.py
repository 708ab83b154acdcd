# flake8: noqa
"""
Azure Resource Manager clients. Each service lives in its own subpackage, e.g.

    from azkit.mgmt.compute import ComputeManagementClient
"""

from ._client import ARMClient
from ._polling import ARMPoller
