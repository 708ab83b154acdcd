from enum import Enum
from typing import List, Optional

from pydantic import Field

from ...core.models import WireModel
from ..models import ManagedServiceIdentity, Resource, TrackedResource


class ProvisioningState(str, Enum):
    ACCEPTED = "Accepted"
    CREATING = "Creating"
    UPDATING = "Updating"
    DELETING = "Deleting"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    CANCELED = "Canceled"
    DELETED = "Deleted"
    NOT_SPECIFIED = "NotSpecified"


class ScopeType(str, Enum):
    LOCAL = "LOCAL"
    GLOBAL = "GLOBAL"


class DefaultMode(str, Enum):
    IPS = "IPS"
    FIREWALL = "FIREWALL"
    NONE = "NONE"


class SecurityServices(WireModel):
    vulnerability_profile: Optional[str] = Field(
        default=None, alias="vulnerabilityProfile"
    )
    anti_spyware_profile: Optional[str] = Field(
        default=None, alias="antiSpywareProfile"
    )
    anti_virus_profile: Optional[str] = Field(default=None, alias="antiVirusProfile")
    url_filtering_profile: Optional[str] = Field(
        default=None, alias="urlFilteringProfile"
    )
    file_blocking_profile: Optional[str] = Field(
        default=None, alias="fileBlockingProfile"
    )
    dns_subscription: Optional[str] = Field(default=None, alias="dnsSubscription")


class RulestackProperties(WireModel):
    pan_etag: Optional[str] = Field(default=None, alias="panEtag")
    pan_location: Optional[str] = Field(default=None, alias="panLocation")
    scope: Optional[ScopeType] = None
    associated_subscriptions: Optional[List[str]] = Field(
        default=None, alias="associatedSubscriptions"
    )
    description: Optional[str] = None
    default_mode: Optional[DefaultMode] = Field(default=None, alias="defaultMode")
    min_app_id_version: Optional[str] = Field(default=None, alias="minAppIdVersion")
    provisioning_state: Optional[ProvisioningState] = Field(
        default=None, alias="provisioningState"
    )
    security_services: Optional[SecurityServices] = Field(
        default=None, alias="securityServices"
    )


class GlobalRulestackResource(Resource):
    """
    A rulestack defined at the tenant level, shared by firewalls across
    subscriptions.
    """

    location: str
    identity: Optional[ManagedServiceIdentity] = None
    properties: RulestackProperties


class NetworkProfile(WireModel):
    network_type: Optional[str] = Field(default=None, alias="networkType")
    enable_egress_nat: Optional[str] = Field(default=None, alias="enableEgressNat")
    public_ips: Optional[List[dict]] = Field(default=None, alias="publicIps")
    vnet_configuration: Optional[dict] = Field(default=None, alias="vnetConfiguration")
    vwan_configuration: Optional[dict] = Field(default=None, alias="vwanConfiguration")


class PlanData(WireModel):
    usage_type: Optional[str] = Field(default=None, alias="usageType")
    billing_cycle: Optional[str] = Field(default=None, alias="billingCycle")
    plan_id: Optional[str] = Field(default=None, alias="planId")


class MarketplaceDetails(WireModel):
    marketplace_subscription_id: Optional[str] = Field(
        default=None, alias="marketplaceSubscriptionId"
    )
    offer_id: Optional[str] = Field(default=None, alias="offerId")
    publisher_id: Optional[str] = Field(default=None, alias="publisherId")
    marketplace_subscription_status: Optional[str] = Field(
        default=None, alias="marketplaceSubscriptionStatus"
    )


class FirewallDeploymentProperties(WireModel):
    pan_etag: Optional[str] = Field(default=None, alias="panEtag")
    network_profile: Optional[NetworkProfile] = Field(
        default=None, alias="networkProfile"
    )
    is_panorama_managed: Optional[str] = Field(default=None, alias="isPanoramaManaged")
    associated_rulestack: Optional[dict] = Field(
        default=None, alias="associatedRulestack"
    )
    dns_settings: Optional[dict] = Field(default=None, alias="dnsSettings")
    front_end_settings: Optional[List[dict]] = Field(
        default=None, alias="frontEndSettings"
    )
    plan_data: Optional[PlanData] = Field(default=None, alias="planData")
    marketplace_details: Optional[MarketplaceDetails] = Field(
        default=None, alias="marketplaceDetails"
    )
    provisioning_state: Optional[ProvisioningState] = Field(
        default=None, alias="provisioningState"
    )


class FirewallResource(TrackedResource):
    identity: Optional[ManagedServiceIdentity] = None
    properties: FirewallDeploymentProperties
