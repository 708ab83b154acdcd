"""
Glue between operation descriptors and the objects that expose them, such as
`client.firewalls` or `client.workspaces`.
"""

from pydantic import BaseModel
from typing import TYPE_CHECKING, Any, Dict, List, TypeVar, Union

if TYPE_CHECKING:
    from .client import ServiceClient


T = TypeVar("T", bound=BaseModel)

_DUMP_ARGS = dict(exclude_none=True, by_alias=True, mode="json")


def safe_json(
    content: Union[T, List[T], Dict[str, Any]]
) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Turns a request body into something `json.dumps` accepts. Models are dumped
    with their wire aliases and without unset optional fields; a list of models
    becomes a list of dicts; a dict is taken to be in wire form already.

    Raises:
        ValueError: for any other input.
    """
    if isinstance(content, BaseModel):
        return content.model_dump(**_DUMP_ARGS)
    if isinstance(content, dict):
        return content
    if isinstance(content, list) and all(isinstance(c, BaseModel) for c in content):
        return [c.model_dump(**_DUMP_ARGS) for c in content]
    raise ValueError(
        f"Cannot send a {type(content).__name__} as a request body; expected a"
        " pydantic model, a list of models or a dict."
    )


class OperationGroup(object):
    """
    Base for a named set of operations on one service, e.g. the firewall
    operations of the Palo Alto Networks client. Subclasses look their
    descriptors up in the service's operation table and call `_send` or
    `_list`; the client creates one instance per group in its __init__.
    """

    _client: "ServiceClient"

    def __init__(self, _client: "ServiceClient"):
        self._client = _client
        self._send = _client.send_operation_request
        self._list = _client.list_operation
