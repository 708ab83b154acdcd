"""
Declarative operation descriptions.

Each REST operation of a service is described once, as an OperationSpec: the
url template, the method, where every parameter goes (path, query, header or
body), and which status codes are successes together with the model of their
body. One generic routine turns a descriptor plus the caller's arguments into a
request, and one turns the response back into a model or an error.
"""

import re
from enum import Enum
from typing import Any, Dict, Mapping, NamedTuple, Optional, Tuple, Type
from urllib.parse import quote

from pydantic import BaseModel
from requests import Response

from .api_resource import safe_json
from .exceptions import DecodeError, error_for_response


class Location(str, Enum):
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"


class Parameter(NamedTuple):
    # The python keyword name the caller passes.
    name: str
    location: Location
    # The name in the url template, query string or header. Defaults to name.
    serialized_name: Optional[str] = None
    required: bool = True
    # Client level values (host, subscription id, api version) are not passed
    # per call but taken from the client.
    client: bool = False
    # Path values that are urls themselves (vault url, ARM endpoint) are not
    # percent encoded.
    skip_quote: bool = False
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None

    @property
    def wire_name(self) -> str:
        return self.serialized_name or self.name


class OperationSpec(NamedTuple):
    name: str
    method: str
    url: str
    parameters: Tuple[Parameter, ...] = ()
    # status code -> model of the body, None when the body is ignored
    responses: Mapping[int, Optional[Type[BaseModel]]] = {200: None}
    accept: str = "application/json"


class PreparedOperation(NamedTuple):
    method: str
    url: str
    params: Dict[str, str]
    headers: Dict[str, str]
    json: Any


_PLACEHOLDER = re.compile(r"\{([^}]+)\}")


def _validate(spec: OperationSpec, param: Parameter, value: Any) -> None:
    if not isinstance(value, str):
        return
    if param.min_length is not None and len(value) < param.min_length:
        raise ValueError(
            f"{spec.name}: '{param.name}' must be at least {param.min_length}"
            " characters long."
        )
    if param.max_length is not None and len(value) > param.max_length:
        raise ValueError(
            f"{spec.name}: '{param.name}' must be at most {param.max_length}"
            " characters long."
        )
    if param.pattern is not None and not re.match(param.pattern, value):
        raise ValueError(
            f"{spec.name}: '{param.name}' must match the pattern {param.pattern}."
        )


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def build_request(
    spec: OperationSpec, client_values: Mapping[str, Any], kwargs: Dict[str, Any]
) -> PreparedOperation:
    """
    Binds the arguments to the operation's parameters. Raises ValueError if a required
    parameter is missing or a value does not validate, and TypeError for unknown
    keyword arguments. Nothing is sent.
    """
    kwargs = dict(kwargs)
    path_values: Dict[str, str] = {}
    params: Dict[str, str] = {}
    headers: Dict[str, str] = {"Accept": spec.accept}
    body: Any = None
    for param in spec.parameters:
        if param.client:
            value = client_values.get(param.name)
        else:
            value = kwargs.pop(param.name, None)
        if value is None:
            if param.required:
                raise ValueError(f"{spec.name}: '{param.name}' is required.")
            continue
        _validate(spec, param, value)
        if param.location == Location.PATH:
            value = str(value)
            path_values[param.wire_name] = (
                value if param.skip_quote else quote(value, safe="")
            )
        elif param.location == Location.QUERY:
            params[param.wire_name] = _query_value(value)
        elif param.location == Location.HEADER:
            headers[param.wire_name] = _query_value(value)
        else:
            body = safe_json(value)
    if kwargs:
        raise TypeError(
            f"{spec.name}() got unexpected keyword arguments:"
            f" {', '.join(sorted(kwargs))}"
        )

    def substitute(match: "re.Match") -> str:
        key = match.group(1)
        if key not in path_values:
            raise ValueError(f"{spec.name}: no value for path parameter '{key}'.")
        return path_values[key]

    url = _PLACEHOLDER.sub(substitute, spec.url)
    return PreparedOperation(spec.method, url, params, headers, body)


def deserialize(spec: OperationSpec, response: Response) -> Any:
    """
    Returns the model declared for the response's status code, None for a status
    without a model or an empty body, and raises the matching HttpResponseError
    for undeclared status codes.
    """
    if response.status_code not in spec.responses:
        raise error_for_response(response)
    model = spec.responses[response.status_code]
    if model is None or not response.content:
        return None
    try:
        return model.model_validate(response.json())
    except ValueError as e:
        raise DecodeError(
            f"{spec.name}: cannot decode the {response.status_code} response as"
            f" {model.__name__}: {e}",
            response=response,
        ) from e
