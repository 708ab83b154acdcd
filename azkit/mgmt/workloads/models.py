from enum import Enum
from typing import List, Optional

from pydantic import Field

from ...core.models import WireModel


class SAPEnvironmentType(str, Enum):
    NON_PROD = "NonProd"
    PROD = "Prod"


class SAPProductType(str, Enum):
    ECC = "ECC"
    S4HANA = "S4HANA"
    OTHER = "Other"


class SAPDeploymentType(str, Enum):
    SINGLE_SERVER = "SingleServer"
    THREE_TIER = "ThreeTier"


class SAPDatabaseType(str, Enum):
    HANA = "HANA"
    DB2 = "DB2"


class SAPDatabaseScaleMethod(str, Enum):
    SCALE_UP = "ScaleUp"


class SAPHighAvailabilityType(str, Enum):
    AVAILABILITY_SET = "AvailabilitySet"
    AVAILABILITY_ZONE = "AvailabilityZone"


class SAPSizingRecommendationRequest(WireModel):
    app_location: str = Field(alias="appLocation")
    environment: SAPEnvironmentType
    sap_product: SAPProductType = Field(alias="sapProduct")
    deployment_type: SAPDeploymentType = Field(alias="deploymentType")
    saps: int
    db_memory: int = Field(alias="dbMemory")
    database_type: SAPDatabaseType = Field(alias="databaseType")
    db_scale_method: Optional[SAPDatabaseScaleMethod] = Field(
        default=None, alias="dbScaleMethod"
    )
    high_availability_type: Optional[SAPHighAvailabilityType] = Field(
        default=None, alias="highAvailabilityType"
    )


class SAPSizingRecommendationResult(WireModel):
    """
    The recommendation for a single server or a three tier deployment. The
    fields of the two shapes are kept as extra fields.
    """

    deployment_type: SAPDeploymentType = Field(alias="deploymentType")


class SAPSupportedSkusRequest(WireModel):
    app_location: str = Field(alias="appLocation")
    environment: SAPEnvironmentType
    sap_product: SAPProductType = Field(alias="sapProduct")
    deployment_type: SAPDeploymentType = Field(alias="deploymentType")
    database_type: SAPDatabaseType = Field(alias="databaseType")
    high_availability_type: Optional[SAPHighAvailabilityType] = Field(
        default=None, alias="highAvailabilityType"
    )


class SAPSupportedSku(WireModel):
    vm_sku: Optional[str] = Field(default=None, alias="vmSku")
    is_app_server_certified: Optional[bool] = Field(
        default=None, alias="isAppServerCertified"
    )
    is_database_certified: Optional[bool] = Field(
        default=None, alias="isDatabaseCertified"
    )


class SAPSupportedResourceSkusResult(WireModel):
    supported_skus: Optional[List[SAPSupportedSku]] = Field(
        default=None, alias="supportedSkus"
    )


class SAPDiskConfigurationsRequest(WireModel):
    app_location: str = Field(alias="appLocation")
    environment: SAPEnvironmentType
    sap_product: SAPProductType = Field(alias="sapProduct")
    database_type: SAPDatabaseType = Field(alias="databaseType")
    deployment_type: SAPDeploymentType = Field(alias="deploymentType")
    db_vm_sku: str = Field(alias="dbVmSku")


class SAPDiskConfiguration(WireModel):
    volume: Optional[str] = None
    disk_type: Optional[str] = Field(default=None, alias="diskType")
    disk_count: Optional[int] = Field(default=None, alias="diskCount")
    disk_size_gb: Optional[int] = Field(default=None, alias="diskSizeGB")
    disk_iops_read_write: Optional[int] = Field(
        default=None, alias="diskIopsReadWrite"
    )
    disk_mbps_read_write: Optional[int] = Field(
        default=None, alias="diskMBpsReadWrite"
    )
    disk_storage_type: Optional[str] = Field(default=None, alias="diskStorageType")


class SAPDiskConfigurationsResult(WireModel):
    disk_configurations: Optional[List[SAPDiskConfiguration]] = Field(
        default=None, alias="diskConfigurations"
    )


class SAPAvailabilityZoneDetailsRequest(WireModel):
    app_location: str = Field(alias="appLocation")
    sap_product: SAPProductType = Field(alias="sapProduct")
    database_type: SAPDatabaseType = Field(alias="databaseType")


class SAPAvailabilityZonePair(WireModel):
    zone_a: Optional[int] = Field(default=None, alias="zoneA")
    zone_b: Optional[int] = Field(default=None, alias="zoneB")


class SAPAvailabilityZoneDetailsResult(WireModel):
    availability_zone_pairs: Optional[List[SAPAvailabilityZonePair]] = Field(
        default=None, alias="availabilityZonePairs"
    )
