from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from ...core.models import WireModel


class SharedToValues(str, Enum):
    TENANT = "tenant"


class OperatingSystemTypes(str, Enum):
    WINDOWS = "Windows"
    LINUX = "Linux"


class OperatingSystemStateTypes(str, Enum):
    GENERALIZED = "Generalized"
    SPECIALIZED = "Specialized"


class SharedGalleryIdentifier(WireModel):
    unique_id: Optional[str] = Field(default=None, alias="uniqueId")


class GalleryImageIdentifier(WireModel):
    publisher: str
    offer: str
    sku: str


class GalleryImageFeature(WireModel):
    name: Optional[str] = None
    value: Optional[str] = None


class ImagePurchasePlan(WireModel):
    name: Optional[str] = None
    publisher: Optional[str] = None
    product: Optional[str] = None


class SharedGalleryImageProperties(WireModel):
    os_type: Optional[OperatingSystemTypes] = Field(default=None, alias="osType")
    os_state: Optional[OperatingSystemStateTypes] = Field(
        default=None, alias="osState"
    )
    end_of_life_date: Optional[datetime] = Field(default=None, alias="endOfLifeDate")
    identifier: Optional[GalleryImageIdentifier] = None
    recommended: Optional[dict] = None
    disallowed: Optional[dict] = None
    hyper_v_generation: Optional[str] = Field(default=None, alias="hyperVGeneration")
    features: Optional[List[GalleryImageFeature]] = None
    purchase_plan: Optional[ImagePurchasePlan] = Field(
        default=None, alias="purchasePlan"
    )


class SharedGalleryImage(WireModel):
    """
    An image definition of a gallery shared with the subscription or tenant.
    """

    name: Optional[str] = None
    location: Optional[str] = None
    identifier: Optional[SharedGalleryIdentifier] = None
    properties: Optional[SharedGalleryImageProperties] = None
