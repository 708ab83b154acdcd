"""
Parameters shared by the operations of all the resource manager services.
"""

from ..core.operation import Location, Parameter

ENDPOINT = Parameter(
    "endpoint", Location.PATH, serialized_name="$host", client=True, skip_quote=True
)
SUBSCRIPTION_ID = Parameter(
    "subscription_id",
    Location.PATH,
    serialized_name="subscriptionId",
    client=True,
    min_length=1,
)
API_VERSION = Parameter(
    "api_version",
    Location.QUERY,
    serialized_name="api-version",
    client=True,
    min_length=1,
)
RESOURCE_GROUP_NAME = Parameter(
    "resource_group_name",
    Location.PATH,
    serialized_name="resourceGroupName",
    pattern=r"^[-\w\._\(\)]+$",
    min_length=1,
    max_length=90,
)
LOCATION = Parameter("location", Location.PATH, min_length=1)
BODY = Parameter("body", Location.BODY)
OPTIONAL_BODY = Parameter("body", Location.BODY, required=False)
