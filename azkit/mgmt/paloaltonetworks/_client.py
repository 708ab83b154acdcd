from typing import Optional

from ...core.api_resource import OperationGroup
from ...core.models import Page
from ...core.operation import Location, OperationSpec, Parameter
from ...core.paging import ItemPaged
from .._client import ARMClient
from .._parameters import API_VERSION, ENDPOINT, RESOURCE_GROUP_NAME, SUBSCRIPTION_ID
from .models import FirewallResource, GlobalRulestackResource

_PROVIDER = "providers/PaloAltoNetworks.Cloudngfw"
_GLOBAL_RULESTACK_NAME = Parameter(
    "global_rulestack_name", Location.PATH, serialized_name="globalRulestackName"
)
_FIREWALL_NAME = Parameter(
    "firewall_name", Location.PATH, serialized_name="firewallName"
)

PALO_ALTO_NETWORKS_OPERATIONS = {
    spec.name: spec
    for spec in (
        OperationSpec(
            name="global_rulestack_list",
            method="GET",
            url="{$host}/" + _PROVIDER + "/globalRulestacks",
            parameters=(ENDPOINT, API_VERSION),
            responses={200: Page[GlobalRulestackResource]},
        ),
        OperationSpec(
            name="global_rulestack_get",
            method="GET",
            url="{$host}/" + _PROVIDER + "/globalRulestacks/{globalRulestackName}",
            parameters=(ENDPOINT, _GLOBAL_RULESTACK_NAME, API_VERSION),
            responses={200: GlobalRulestackResource},
        ),
        OperationSpec(
            name="firewalls_list_by_subscription",
            method="GET",
            url="{$host}/subscriptions/{subscriptionId}/" + _PROVIDER + "/firewalls",
            parameters=(ENDPOINT, SUBSCRIPTION_ID, API_VERSION),
            responses={200: Page[FirewallResource]},
        ),
        OperationSpec(
            name="firewalls_list_by_resource_group",
            method="GET",
            url=(
                "{$host}/subscriptions/{subscriptionId}/resourceGroups"
                "/{resourceGroupName}/" + _PROVIDER + "/firewalls"
            ),
            parameters=(ENDPOINT, SUBSCRIPTION_ID, RESOURCE_GROUP_NAME, API_VERSION),
            responses={200: Page[FirewallResource]},
        ),
        OperationSpec(
            name="firewalls_get",
            method="GET",
            url=(
                "{$host}/subscriptions/{subscriptionId}/resourceGroups"
                "/{resourceGroupName}/" + _PROVIDER + "/firewalls/{firewallName}"
            ),
            parameters=(
                ENDPOINT,
                SUBSCRIPTION_ID,
                RESOURCE_GROUP_NAME,
                _FIREWALL_NAME,
                API_VERSION,
            ),
            responses={200: FirewallResource},
        ),
    )
}


class GlobalRulestackOperations(OperationGroup):
    """
    Global rulestacks live at the tenant level: these operations do not need a
    subscription id.
    """

    def list(self) -> ItemPaged[GlobalRulestackResource]:
        return self._list(PALO_ALTO_NETWORKS_OPERATIONS["global_rulestack_list"])

    def get(self, global_rulestack_name: str) -> GlobalRulestackResource:
        return self._send(
            PALO_ALTO_NETWORKS_OPERATIONS["global_rulestack_get"],
            global_rulestack_name=global_rulestack_name,
        )


class FirewallsOperations(OperationGroup):
    def list_by_subscription(self) -> ItemPaged[FirewallResource]:
        """
        Lists the firewalls of the client's subscription.
        """
        return self._list(
            PALO_ALTO_NETWORKS_OPERATIONS["firewalls_list_by_subscription"]
        )

    def list_by_resource_group(
        self, resource_group_name: str
    ) -> ItemPaged[FirewallResource]:
        return self._list(
            PALO_ALTO_NETWORKS_OPERATIONS["firewalls_list_by_resource_group"],
            resource_group_name=resource_group_name,
        )

    def get(self, resource_group_name: str, firewall_name: str) -> FirewallResource:
        return self._send(
            PALO_ALTO_NETWORKS_OPERATIONS["firewalls_get"],
            resource_group_name=resource_group_name,
            firewall_name=firewall_name,
        )


class PaloAltoNetworksCloudngfw(ARMClient):
    """
    Client of the PaloAltoNetworks.Cloudngfw resource provider. The
    subscription id is optional: without it only the tenant level operations
    (global rulestacks) can be called.
    """

    api_version = "2022-08-29"
    subscription_required = False

    def __init__(self, credential, subscription_id: Optional[str] = None, **kwargs):
        super().__init__(credential, subscription_id, **kwargs)
        self.global_rulestack = GlobalRulestackOperations(self)
        self.firewalls = FirewallsOperations(self)
