from typing import Optional

from ...core.api_resource import OperationGroup
from ...core.operation import Location, OperationSpec, Parameter
from .._client import ARMClient
from .._parameters import API_VERSION, ENDPOINT, RESOURCE_GROUP_NAME, SUBSCRIPTION_ID
from .._polling import ARMPoller
from .models import (
    ListStorageAccountKeysResult,
    NotebookAccessTokenResult,
    OnlineEndpointData,
)

_WORKSPACE = (
    "{$host}/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
    "/providers/Microsoft.MachineLearningServices/workspaces/{workspaceName}"
)
_WORKSPACE_NAME = Parameter(
    "workspace_name",
    Location.PATH,
    serialized_name="workspaceName",
    pattern=r"^[a-zA-Z0-9][a-zA-Z0-9_-]{2,32}$",
)
_ENDPOINT_NAME = Parameter(
    "endpoint_name",
    Location.PATH,
    serialized_name="endpointName",
    pattern=r"^[a-zA-Z][a-zA-Z0-9-]{0,31}$",
)
_WORKSPACE_PARAMETERS = (
    ENDPOINT,
    SUBSCRIPTION_ID,
    RESOURCE_GROUP_NAME,
    _WORKSPACE_NAME,
    API_VERSION,
)

MACHINE_LEARNING_OPERATIONS = {
    spec.name: spec
    for spec in (
        OperationSpec(
            name="workspaces_list_notebook_access_token",
            method="POST",
            url=_WORKSPACE + "/listNotebookAccessToken",
            parameters=_WORKSPACE_PARAMETERS,
            responses={200: NotebookAccessTokenResult},
        ),
        OperationSpec(
            name="workspaces_list_storage_account_keys",
            method="POST",
            url=_WORKSPACE + "/listStorageAccountKeys",
            parameters=_WORKSPACE_PARAMETERS,
            responses={200: ListStorageAccountKeysResult},
        ),
        OperationSpec(
            name="online_endpoints_get",
            method="GET",
            url=_WORKSPACE + "/onlineEndpoints/{endpointName}",
            parameters=_WORKSPACE_PARAMETERS + (_ENDPOINT_NAME,),
            responses={200: OnlineEndpointData},
        ),
        OperationSpec(
            name="online_endpoints_delete",
            method="DELETE",
            url=_WORKSPACE + "/onlineEndpoints/{endpointName}",
            parameters=_WORKSPACE_PARAMETERS + (_ENDPOINT_NAME,),
            responses={200: None, 202: None, 204: None},
        ),
    )
}


class WorkspacesOperations(OperationGroup):
    def list_notebook_access_token(
        self, resource_group_name: str, workspace_name: str
    ) -> NotebookAccessTokenResult:
        """
        Returns a token to access the notebook resource of the workspace.
        """
        return self._send(
            MACHINE_LEARNING_OPERATIONS["workspaces_list_notebook_access_token"],
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
        )

    def list_storage_account_keys(
        self, resource_group_name: str, workspace_name: str
    ) -> ListStorageAccountKeysResult:
        return self._send(
            MACHINE_LEARNING_OPERATIONS["workspaces_list_storage_account_keys"],
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
        )


class OnlineEndpointsOperations(OperationGroup):
    def get(
        self, resource_group_name: str, workspace_name: str, endpoint_name: str
    ) -> OnlineEndpointData:
        return self._send(
            MACHINE_LEARNING_OPERATIONS["online_endpoints_get"],
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
            endpoint_name=endpoint_name,
        )

    def begin_delete(
        self,
        resource_group_name: str,
        workspace_name: str,
        endpoint_name: str,
        *,
        polling_interval: Optional[float] = None,
        continuation_token: Optional[str] = None,
    ) -> ARMPoller:
        """
        Deletes an online endpoint. The returned poller's result() waits until
        the deletion completes and returns None.
        """
        return self._client.begin_operation(  # type: ignore
            MACHINE_LEARNING_OPERATIONS["online_endpoints_delete"],
            polling_interval=polling_interval,
            continuation_token=continuation_token,
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
            endpoint_name=endpoint_name,
        )


class AzureMachineLearningWorkspaces(ARMClient):
    """
    Client of the Microsoft.MachineLearningServices resource provider.
    """

    api_version = "2022-02-01-preview"

    def __init__(self, credential, subscription_id: Optional[str] = None, **kwargs):
        super().__init__(credential, subscription_id, **kwargs)
        self.workspaces = WorkspacesOperations(self)
        self.online_endpoints = OnlineEndpointsOperations(self)
