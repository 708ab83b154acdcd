from typing import Optional, Union

from ...core.api_resource import OperationGroup
from ...core.models import Page
from ...core.operation import Location, OperationSpec, Parameter
from ...core.paging import ItemPaged
from .._client import ARMClient
from .._parameters import (
    API_VERSION,
    BODY,
    ENDPOINT,
    RESOURCE_GROUP_NAME,
    SUBSCRIPTION_ID,
)
from .models import Firmware

_FIRMWARES = (
    "{$host}/subscriptions/{subscriptionId}/resourceGroups/{resourceGroupName}"
    "/providers/Microsoft.IoTFirmwareDefense/workspaces/{workspaceName}/firmwares"
)
_WORKSPACE_NAME = Parameter(
    "workspace_name", Location.PATH, serialized_name="workspaceName"
)
_FIRMWARE_ID = Parameter("firmware_id", Location.PATH, serialized_name="firmwareId")
_WORKSPACE_PARAMETERS = (
    ENDPOINT,
    SUBSCRIPTION_ID,
    RESOURCE_GROUP_NAME,
    _WORKSPACE_NAME,
    API_VERSION,
)

IOT_FIRMWARE_DEFENSE_OPERATIONS = {
    spec.name: spec
    for spec in (
        OperationSpec(
            name="firmware_create",
            method="PUT",
            url=_FIRMWARES + "/{firmwareId}",
            parameters=_WORKSPACE_PARAMETERS + (_FIRMWARE_ID, BODY),
            responses={200: Firmware, 201: Firmware},
        ),
        OperationSpec(
            name="firmware_get",
            method="GET",
            url=_FIRMWARES + "/{firmwareId}",
            parameters=_WORKSPACE_PARAMETERS + (_FIRMWARE_ID,),
            responses={200: Firmware},
        ),
        OperationSpec(
            name="firmware_delete",
            method="DELETE",
            url=_FIRMWARES + "/{firmwareId}",
            parameters=_WORKSPACE_PARAMETERS + (_FIRMWARE_ID,),
            responses={200: None, 204: None},
        ),
        OperationSpec(
            name="firmware_list",
            method="GET",
            url=_FIRMWARES,
            parameters=_WORKSPACE_PARAMETERS,
            responses={200: Page[Firmware]},
        ),
    )
}


class FirmwareOperations(OperationGroup):
    def create(
        self,
        resource_group_name: str,
        workspace_name: str,
        firmware_id: str,
        firmware: Union[Firmware, dict],
    ) -> Firmware:
        """
        Creates (or replaces) a firmware entry in the workspace.
        """
        return self._send(
            IOT_FIRMWARE_DEFENSE_OPERATIONS["firmware_create"],
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
            firmware_id=firmware_id,
            body=firmware,
        )

    def get(
        self, resource_group_name: str, workspace_name: str, firmware_id: str
    ) -> Firmware:
        return self._send(
            IOT_FIRMWARE_DEFENSE_OPERATIONS["firmware_get"],
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
            firmware_id=firmware_id,
        )

    def delete(
        self, resource_group_name: str, workspace_name: str, firmware_id: str
    ) -> None:
        self._send(
            IOT_FIRMWARE_DEFENSE_OPERATIONS["firmware_delete"],
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
            firmware_id=firmware_id,
        )

    def list(
        self, resource_group_name: str, workspace_name: str
    ) -> ItemPaged[Firmware]:
        return self._list(
            IOT_FIRMWARE_DEFENSE_OPERATIONS["firmware_list"],
            resource_group_name=resource_group_name,
            workspace_name=workspace_name,
        )


class IoTFirmwareDefenseClient(ARMClient):
    """
    Client of the Microsoft.IoTFirmwareDefense resource provider.
    """

    api_version = "2023-02-08-preview"

    def __init__(self, credential, subscription_id: Optional[str] = None, **kwargs):
        super().__init__(credential, subscription_id, **kwargs)
        self.firmware_operations = FirmwareOperations(self)
