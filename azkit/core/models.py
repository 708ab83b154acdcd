from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """
    Base of the models that mirror a service's json schema. Fields use the
    python name and carry the wire name as alias; both are accepted when
    constructing a model. Unknown fields sent by the service are kept, so that
    a model read from the service can be sent back without losing data.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")


T = TypeVar("T")


class Page(WireModel, Generic[T]):
    """
    One page of a collection, in the `value` / `nextLink` shape shared by Key
    Vault and ARM.
    """

    value: Optional[List[T]] = None
    next_link: Optional[str] = Field(default=None, alias="nextLink")
