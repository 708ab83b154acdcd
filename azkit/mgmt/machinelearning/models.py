from enum import Enum
from typing import Dict, Optional

from pydantic import Field

from ...core.models import WireModel
from ..models import ManagedServiceIdentity, TrackedResource


class NotebookAccessTokenResult(WireModel):
    """
    A short lived token to access the notebook resource of a workspace. All
    the fields are read only.
    """

    notebook_resource_id: Optional[str] = Field(
        default=None, alias="notebookResourceId"
    )
    host_name: Optional[str] = Field(default=None, alias="hostName")
    public_dns: Optional[str] = Field(default=None, alias="publicDns")
    access_token: Optional[str] = Field(default=None, alias="accessToken")
    token_type: Optional[str] = Field(default=None, alias="tokenType")
    expires_in: Optional[int] = Field(default=None, alias="expiresIn")
    refresh_token: Optional[str] = Field(default=None, alias="refreshToken")
    scope: Optional[str] = None


class ListStorageAccountKeysResult(WireModel):
    user_storage_key: Optional[str] = Field(default=None, alias="userStorageKey")


class EndpointAuthMode(str, Enum):
    AML_TOKEN = "AMLToken"
    KEY = "Key"
    AAD_TOKEN = "AADToken"


class EndpointProvisioningState(str, Enum):
    CREATING = "Creating"
    DELETING = "Deleting"
    SUCCEEDED = "Succeeded"
    FAILED = "Failed"
    UPDATING = "Updating"
    CANCELED = "Canceled"


class OnlineEndpointDetails(WireModel):
    auth_mode: EndpointAuthMode = Field(alias="authMode")
    description: Optional[str] = None
    properties: Optional[Dict[str, str]] = None
    scoring_uri: Optional[str] = Field(default=None, alias="scoringUri")
    swagger_uri: Optional[str] = Field(default=None, alias="swaggerUri")
    compute: Optional[str] = None
    provisioning_state: Optional[EndpointProvisioningState] = Field(
        default=None, alias="provisioningState"
    )
    # deployment name -> percentage of the traffic
    traffic: Optional[Dict[str, int]] = None


class OnlineEndpointData(TrackedResource):
    identity: Optional[ManagedServiceIdentity] = None
    kind: Optional[str] = None
    properties: OnlineEndpointDetails
    sku: Optional[dict] = None
