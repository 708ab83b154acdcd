"""
Models shared by all the resource manager services.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import Field

from ..core.models import WireModel


class CreatedByType(str, Enum):
    USER = "User"
    APPLICATION = "Application"
    MANAGED_IDENTITY = "ManagedIdentity"
    KEY = "Key"


class SystemData(WireModel):
    """
    Metadata pertaining to creation and last modification of the resource.
    """

    created_by: Optional[str] = Field(default=None, alias="createdBy")
    created_by_type: Optional[CreatedByType] = Field(
        default=None, alias="createdByType"
    )
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    last_modified_by: Optional[str] = Field(default=None, alias="lastModifiedBy")
    last_modified_by_type: Optional[CreatedByType] = Field(
        default=None, alias="lastModifiedByType"
    )
    last_modified_at: Optional[datetime] = Field(default=None, alias="lastModifiedAt")


class Resource(WireModel):
    """
    Common fields that are returned in the response for all resources. All of
    them are read only.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    system_data: Optional[SystemData] = Field(default=None, alias="systemData")


class TrackedResource(Resource):
    location: Optional[str] = None
    tags: Optional[Dict[str, str]] = None


class ManagedServiceIdentity(WireModel):
    type: Optional[str] = None
    principal_id: Optional[str] = Field(default=None, alias="principalId")
    tenant_id: Optional[str] = Field(default=None, alias="tenantId")
    user_assigned_identities: Optional[Dict[str, Dict]] = Field(
        default=None, alias="userAssignedIdentities"
    )


class OperationDisplay(WireModel):
    provider: Optional[str] = None
    resource: Optional[str] = None
    operation: Optional[str] = None
    description: Optional[str] = None


class Operation(WireModel):
    """
    A REST API operation offered by a resource provider.
    """

    name: Optional[str] = None
    is_data_action: Optional[bool] = Field(default=None, alias="isDataAction")
    display: Optional[OperationDisplay] = None
    origin: Optional[str] = None
    action_type: Optional[str] = Field(default=None, alias="actionType")
