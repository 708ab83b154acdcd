from typing import Optional, Union

from ...core.api_resource import OperationGroup
from ...core.models import Page
from ...core.operation import Location, OperationSpec, Parameter
from ...core.paging import ItemPaged
from .._client import ARMClient
from .._parameters import API_VERSION, ENDPOINT, LOCATION, SUBSCRIPTION_ID
from .models import SharedGalleryImage, SharedToValues

_SHARED_GALLERY = (
    "{$host}/subscriptions/{subscriptionId}/providers/Microsoft.Compute"
    "/locations/{location}/sharedGalleries/{galleryUniqueName}"
)
_GALLERY_UNIQUE_NAME = Parameter(
    "gallery_unique_name", Location.PATH, serialized_name="galleryUniqueName"
)
_GALLERY_IMAGE_NAME = Parameter(
    "gallery_image_name", Location.PATH, serialized_name="galleryImageName"
)
_SHARED_TO = Parameter(
    "shared_to", Location.QUERY, serialized_name="sharedTo", required=False
)

COMPUTE_OPERATIONS = {
    spec.name: spec
    for spec in (
        OperationSpec(
            name="shared_gallery_images_list",
            method="GET",
            url=_SHARED_GALLERY + "/images",
            parameters=(
                ENDPOINT,
                SUBSCRIPTION_ID,
                LOCATION,
                _GALLERY_UNIQUE_NAME,
                API_VERSION,
                _SHARED_TO,
            ),
            responses={200: Page[SharedGalleryImage]},
        ),
        OperationSpec(
            name="shared_gallery_images_get",
            method="GET",
            url=_SHARED_GALLERY + "/images/{galleryImageName}",
            parameters=(
                ENDPOINT,
                SUBSCRIPTION_ID,
                LOCATION,
                _GALLERY_UNIQUE_NAME,
                _GALLERY_IMAGE_NAME,
                API_VERSION,
            ),
            responses={200: SharedGalleryImage},
        ),
    )
}


class SharedGalleryImagesOperations(OperationGroup):
    def list(
        self,
        location: str,
        gallery_unique_name: str,
        shared_to: Optional[Union[SharedToValues, str]] = None,
    ) -> ItemPaged[SharedGalleryImage]:
        """
        Lists the images of a shared gallery, shared with the subscription, or
        with the tenant when shared_to is "tenant".
        """
        return self._list(
            COMPUTE_OPERATIONS["shared_gallery_images_list"],
            location=location,
            gallery_unique_name=gallery_unique_name,
            shared_to=shared_to,
        )

    def get(
        self, location: str, gallery_unique_name: str, gallery_image_name: str
    ) -> SharedGalleryImage:
        return self._send(
            COMPUTE_OPERATIONS["shared_gallery_images_get"],
            location=location,
            gallery_unique_name=gallery_unique_name,
            gallery_image_name=gallery_image_name,
        )


class ComputeManagementClient(ARMClient):
    """
    Client of the Microsoft.Compute resource provider, limited to the shared
    gallery images.
    """

    api_version = "2021-07-01"

    def __init__(self, credential, subscription_id: Optional[str] = None, **kwargs):
        super().__init__(credential, subscription_id, **kwargs)
        self.shared_gallery_images = SharedGalleryImagesOperations(self)
