from typing import Optional, Union

from ...core.api_resource import OperationGroup
from ...core.models import Page
from ...core.operation import OperationSpec
from ...core.paging import ItemPaged
from .._client import ARMClient
from .._parameters import (
    API_VERSION,
    ENDPOINT,
    LOCATION,
    OPTIONAL_BODY,
    SUBSCRIPTION_ID,
)
from ..models import Operation
from .models import (
    SAPAvailabilityZoneDetailsRequest,
    SAPAvailabilityZoneDetailsResult,
    SAPDiskConfigurationsRequest,
    SAPDiskConfigurationsResult,
    SAPSizingRecommendationRequest,
    SAPSizingRecommendationResult,
    SAPSupportedResourceSkusResult,
    SAPSupportedSkusRequest,
)

_METADATA = (
    "{$host}/subscriptions/{subscriptionId}/providers/Microsoft.Workloads"
    "/locations/{location}/sapVirtualInstanceMetadata/default"
)
_METADATA_PARAMETERS = (ENDPOINT, SUBSCRIPTION_ID, LOCATION, API_VERSION, OPTIONAL_BODY)

WORKLOADS_OPERATIONS = {
    spec.name: spec
    for spec in (
        OperationSpec(
            name="sap_sizing_recommendations",
            method="POST",
            url=_METADATA + "/getSizingRecommendations",
            parameters=_METADATA_PARAMETERS,
            responses={200: SAPSizingRecommendationResult},
        ),
        OperationSpec(
            name="sap_supported_sku",
            method="POST",
            url=_METADATA + "/getSapSupportedSku",
            parameters=_METADATA_PARAMETERS,
            responses={200: SAPSupportedResourceSkusResult},
        ),
        OperationSpec(
            name="sap_disk_configurations",
            method="POST",
            url=_METADATA + "/getDiskConfigurations",
            parameters=_METADATA_PARAMETERS,
            responses={200: SAPDiskConfigurationsResult},
        ),
        OperationSpec(
            name="sap_availability_zone_details",
            method="POST",
            url=_METADATA + "/getAvailabilityZoneDetails",
            parameters=_METADATA_PARAMETERS,
            responses={200: SAPAvailabilityZoneDetailsResult},
        ),
        OperationSpec(
            name="operations_list",
            method="GET",
            url="{$host}/providers/Microsoft.Workloads/operations",
            parameters=(ENDPOINT, API_VERSION),
            responses={200: Page[Operation]},
        ),
    )
}


class Operations(OperationGroup):
    def list(self) -> ItemPaged[Operation]:
        """
        Lists all the operations of the Microsoft.Workloads provider.
        """
        return self._list(WORKLOADS_OPERATIONS["operations_list"])


class WorkloadsClient(ARMClient):
    """
    Client of the Microsoft.Workloads resource provider: sizing and
    configuration recommendations for SAP deployments.
    """

    api_version = "2021-12-01-preview"

    def __init__(self, credential, subscription_id: Optional[str] = None, **kwargs):
        super().__init__(credential, subscription_id, **kwargs)
        self.operations = Operations(self)

    def sap_sizing_recommendations(
        self,
        location: str,
        body: Optional[Union[SAPSizingRecommendationRequest, dict]] = None,
    ) -> SAPSizingRecommendationResult:
        """
        Get SAP sizing recommendations.

        :param location: the name of the Azure region.
        """
        return self.send_operation_request(
            WORKLOADS_OPERATIONS["sap_sizing_recommendations"],
            location=location,
            body=body,
        )

    def sap_supported_sku(
        self,
        location: str,
        body: Optional[Union[SAPSupportedSkusRequest, dict]] = None,
    ) -> SAPSupportedResourceSkusResult:
        """
        Get SAP supported SKUs.
        """
        return self.send_operation_request(
            WORKLOADS_OPERATIONS["sap_supported_sku"], location=location, body=body
        )

    def sap_disk_configurations(
        self,
        location: str,
        body: Optional[Union[SAPDiskConfigurationsRequest, dict]] = None,
    ) -> SAPDiskConfigurationsResult:
        """
        Get SAP disk configurations.
        """
        return self.send_operation_request(
            WORKLOADS_OPERATIONS["sap_disk_configurations"],
            location=location,
            body=body,
        )

    def sap_availability_zone_details(
        self,
        location: str,
        body: Optional[Union[SAPAvailabilityZoneDetailsRequest, dict]] = None,
    ) -> SAPAvailabilityZoneDetailsResult:
        """
        Get SAP availability zone details.
        """
        return self.send_operation_request(
            WORKLOADS_OPERATIONS["sap_availability_zone_details"],
            location=location,
            body=body,
        )
